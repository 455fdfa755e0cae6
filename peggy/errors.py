# peggy/errors.py
"""Exception taxonomy.

A parse that simply does not match is never an exception: it is reported as
``Match(False, 0, None)``. Exceptions are for misuse of the library
(``GrammarError``, binding errors, accessor errors), for handlers that want to
veto a structural match (``NoMatch``), and for ``parse_full`` callers who
asked for the whole input to match (``ParseError``).
"""

from __future__ import annotations
from typing import List, Sequence, Tuple


class PeggyError(Exception):
    """Base class of every exception raised by peggy."""


class GrammarError(PeggyError, TypeError):
    """A parser tree was built from something that is not a parser."""


class UnboundDeferredError(PeggyError, RuntimeError):
    """A deferred parser was invoked before `bind()` was called on it."""


class AlreadyBoundError(PeggyError, RuntimeError):
    """`bind()` was called twice on the same deferred parser."""


class ResultAccessError(PeggyError, IndexError):
    """A handler asked for a result that does not exist or has the wrong shape."""


class NoMatch(PeggyError):
    """Raise from a handler to turn a successful match into a failure."""


class ConversionError(NoMatch, ValueError):
    """A converter could not turn the matched text into a value."""


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """Return the [start, end) bounds of the line containing pos."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def line_col(src: str, pos: int) -> Tuple[int, int]:
    """1-based (line, column) of absolute offset pos."""
    line = src.count("\n", 0, pos) + 1
    col = (pos - _line_bounds(src, pos)[0]) + 1
    return line, col


def caret_snippet(src: str, pos: int) -> str:
    """The line holding pos with a caret (^) under it."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"


class ParseError(PeggyError, SyntaxError):
    """The input did not match completely (raised by `Parser.parse_full`).

    Attributes
    ----------
    pos : int
        Absolute offset of the farthest point the parser failed at.
    line, col : int
        1-based position of `pos`.
    expected : list of str
        Descriptions of the parsers that failed at `pos`, in first-seen order.
    """

    def __init__(self, text: str, pos: int, expected: Sequence[str]):
        self.pos = pos
        self.line, self.col = line_col(text, pos)
        self.expected: List[str] = list(expected)
        where = "EOF" if pos >= len(text) else f"{self.line}:{self.col}"
        msg = f"Parse error at {where}"
        if pos < len(text):
            msg += f": unexpected {text[pos]!r}"
        if self.expected:
            msg += f", expected one of {{{', '.join(self.expected)}}}"
        super().__init__(msg + "\n" + caret_snippet(text, pos))
