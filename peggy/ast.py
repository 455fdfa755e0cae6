# peggy/ast.py
from __future__ import annotations
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Tuple, TYPE_CHECKING

from .errors import AlreadyBoundError, GrammarError

if TYPE_CHECKING:
    from .convert import Converter
    from .runtime import State
    from .trace import Tracer

Handler = Callable[["State"], Any]

# ---- Parser node definitions ----
#
# Nodes are built bottom-up and configured with builder-style decorators that
# return the node itself:
#
#     number = one_or_more(any_of("0123456789")).adjacent().convert(Int)
#
# Once parsing starts a tree is only read; everything that changes during a
# parse lives in runtime.State.


class Match(NamedTuple):
    matched: bool
    consumed: int
    value: Any


NO_MATCH = Match(False, 0, None)


class Parser:
    """Common base of every parser node."""

    def __init__(self, description: str, allow_empty: bool = False,
                 children: Iterable["Parser"] = ()):
        self.description = description
        self._allow_empty = allow_empty
        self.children: List[Parser] = list(children)
        self.is_adjacent = False
        self.flatten_depth: Optional[int] = None
        self.handler: Optional[Handler] = None
        self.debug_depth = 0

    @property
    def allow_empty(self) -> bool:
        """True if a zero-length match counts as success."""
        return self._allow_empty

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description}>"

    # ---- Decorators ----
    def adjacent(self) -> "Parser":
        """Sub-parsers must match with no intervening whitespace."""
        self.is_adjacent = True
        return self

    def handle(self, handler: Handler) -> "Parser":
        """Replace the match result with handler(state)."""
        if not callable(handler):
            raise GrammarError(f"handler must be callable, got {handler!r}")
        self.handler = handler
        return self

    def convert(self, converter: "Converter") -> "Parser":
        """Use a predefined or user-defined converter as the handler."""
        return self.handle(converter.convert)

    def pick(self, index: int) -> "Parser":
        """Shortcut for a handler returning ``state.get(index)``."""
        return self.handle(lambda s: s.get(index))

    def flatten(self, depth: int = 0) -> "Parser":
        """Flatten `depth` levels of nested list results before the handler runs.

            sequence(a, one_or_more(b))              -> [a, [b, b, b]]
            sequence(a, one_or_more(b)).flatten(1)   -> [a, b, b, b]

        A depth of 0 flattens completely.
        """
        if depth < 0:
            raise GrammarError(f"flatten depth must be >= 0, got {depth}")
        self.flatten_depth = depth
        return self

    def describe(self, text: str) -> "Parser":
        """Change the label shown in traces and error messages."""
        self.description = text
        return self

    def debug(self, depth: int) -> "Parser":
        """Trace `depth` levels of parsers; applies to the parser parse() is called on."""
        self.debug_depth = depth
        return self

    # ---- Entry points ----
    def parse(self, text: str, tracer: Optional["Tracer"] = None) -> Match:
        """Match the start of text; see runtime.run."""
        from .runtime import run
        return run(self, text, tracer)

    def parse_full(self, text: str, tracer: Optional["Tracer"] = None) -> Any:
        """Match all of text and return the value; raises ParseError otherwise."""
        from .runtime import run_full
        return run_full(self, text, tracer)


def _text_handler(state: "State") -> str:
    return state.text


class CharClass(Parser):
    # ranges are inclusive (lo..hi) code points; singles is a set of characters
    def __init__(self, description: str, singles: str = "",
                 ranges: Iterable[Tuple[int, int]] = (), negated: bool = False):
        super().__init__(description)
        self.singles = frozenset(singles)
        self.ranges: List[Tuple[int, int]] = list(ranges)
        self.negated = negated

    def accepts(self, ch: str) -> bool:
        ok = ch in self.singles
        if not ok:
            cp = ord(ch)
            for (lo, hi) in self.ranges:
                if lo <= cp <= hi:
                    ok = True
                    break
        return (not ok) if self.negated else ok


class AnyChar(Parser):
    def __init__(self):
        super().__init__("AnyChar")


class Literal(Parser):
    def __init__(self, text: str):
        super().__init__(f"Literal({text})", allow_empty=(text == ""))
        self.text = text
        self.handler = _text_handler


class Seq(Parser):
    def __init__(self, items: List[Parser]):
        super().__init__("Sequence", children=items)


class Choice(Parser):
    def __init__(self, alts: List[Parser]):
        super().__init__("OneOf", children=alts)


class Repeat(Parser):
    _NAMES = {"*": "ZeroOrMoreOf", "+": "OneOrMoreOf", "?": "Optional"}

    def __init__(self, items: List[Parser], kind: str):
        if kind not in self._NAMES:
            raise AssertionError(f"unknown repeat kind {kind!r}")
        super().__init__(self._NAMES[kind], allow_empty=(kind != "+"), children=items)
        self.kind = kind


class And(Parser):
    """Positive lookahead (&): never consumes input."""

    def __init__(self, node: Parser):
        super().__init__("FollowedBy", allow_empty=True, children=[node])


class Not(Parser):
    """Negative lookahead (!): never consumes input."""

    def __init__(self, node: Parser):
        super().__init__("NotFollowedBy", allow_empty=True, children=[node])


class Deferred(Parser):
    """Stands in for a parser supplied later with bind().

    Recursive rules are written by creating the placeholder first, using it
    inside the rule body, then binding it to the finished body:

        expr = deferred()
        term = one_of(number, sequence("(", expr, ")").pick(2))
        expr.bind(sequence(term, zero_or_more(sequence(one_of("+", "-"), term))))
    """

    def __init__(self):
        super().__init__("Proxy")
        self.delegate: Optional[Parser] = None

    @property
    def allow_empty(self) -> bool:
        # read by the engine when listing the tokens a failed sequence expected
        return self.delegate is not None and self.delegate.allow_empty

    def bind(self, delegate: Any) -> "Deferred":
        if self.delegate is not None:
            raise AlreadyBoundError(f"{self.description} is already bound to {self.delegate!r}")
        self.delegate = _as_parser(delegate)
        return self


# ---- Constructors ----

def _as_parser(p: Any) -> Parser:
    """Parsers pass through; strings become literals."""
    if isinstance(p, Parser):
        return p
    if isinstance(p, str):
        return Literal(p)
    raise GrammarError(f"{p!r} is not a Parser or string")


def _as_parsers(pv: Iterable[Any]) -> List[Parser]:
    return [_as_parser(p) for p in pv]


def any_of(chars: str) -> Parser:
    """Match any one character in chars."""
    return CharClass(f"AnyOf({chars})", singles=chars)


def none_of(chars: str) -> Parser:
    """Match any one character not in chars."""
    return CharClass(f"NoneOf({chars})", singles=chars, negated=True)


def char_range(*bounds: str, negated: bool = False) -> Parser:
    """Match one character inside any of the inclusive ranges.

    Bounds are given pairwise: ``char_range("a", "z", "A", "Z")``.
    """
    if not bounds or len(bounds) % 2:
        raise GrammarError("char_range needs (lo, hi) pairs")
    ranges = []
    for lo, hi in zip(bounds[::2], bounds[1::2]):
        if len(lo) != 1 or len(hi) != 1:
            raise GrammarError(f"range bounds must be single characters: {lo!r}-{hi!r}")
        ranges.append((ord(lo), ord(hi)))
    label = ",".join(f"{lo}-{hi}" for lo, hi in zip(bounds[::2], bounds[1::2]))
    return CharClass(f"Range({'^' if negated else ''}{label})", ranges=ranges, negated=negated)


def any_char() -> Parser:
    return AnyChar()


def literal(text: str) -> Parser:
    """Match text exactly; the default handler returns the matched text."""
    if not isinstance(text, str):
        raise GrammarError(f"{text!r} is not a string")
    return Literal(text)


def sequence(*items: Any) -> Parser:
    """Match each item in turn. Items may be parsers or strings."""
    return Seq(_as_parsers(items))


def one_of(*items: Any) -> Parser:
    """Try items in order and stop at the first that matches."""
    return Choice(_as_parsers(items))


def zero_or_more(*items: Any) -> Parser:
    """Keep matching as long as any of the items matches."""
    return Repeat(_as_parsers(items), "*")


def one_or_more(*items: Any) -> Parser:
    """Like zero_or_more but must match at least once."""
    return Repeat(_as_parsers(items), "+")


def optional(item: Any) -> Parser:
    return Repeat([_as_parser(item)], "?")


def followed_by(item: Any) -> Parser:
    return And(_as_parser(item))


def not_followed_by(item: Any) -> Parser:
    return Not(_as_parser(item))


def deferred() -> Deferred:
    return Deferred()
