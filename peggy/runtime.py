# peggy/runtime.py
from __future__ import annotations
from typing import Any, List, Optional, TYPE_CHECKING

from .errors import ParseError, ResultAccessError
from .trace import LoggingTracer, NullTracer, Tracer

if TYPE_CHECKING:
    from .ast import Match, Parser


class State:
    """Bookkeeping for one call to Parser.parse; also what handlers receive.

    Handlers read the current match through `text`, `len(state)` and
    `get(index)`. Index 0 is the node's own (post-flatten) result; index i is
    the i-th entry of a list result, so for a sequence it is what the i-th
    sub-parser produced.
    """

    def __init__(self, debug: int = 0, tracer: Optional[Tracer] = None):
        # if == 0 leading whitespace is skipped before each parser runs
        self.no_skip = 0
        self.depth = 0
        # remaining trace depth
        self.debug = debug
        self.tracer: Tracer = tracer if tracer is not None else NullTracer()
        self.matched = ""
        self.result: Any = None
        # farthest offset a parser failed at, and what was tried there
        self.farthest = 0
        self.expected: List[str] = []

    def note_failure(self, pos: int, description: str) -> None:
        if pos > self.farthest:
            self.farthest = pos
            self.expected = [description]
        elif pos == self.farthest and description not in self.expected:
            self.expected.append(description)

    # ---- Handler accessors ----
    @property
    def text(self) -> str:
        """The text matched by the current parser, without leading whitespace."""
        return self.matched

    def __len__(self) -> int:
        if isinstance(self.result, list):
            return len(self.result)
        return 0

    def get(self, index: int) -> Any:
        if index == 0:
            return self.result
        if not isinstance(self.result, list):
            raise ResultAccessError(f"result {self.result!r} has no entry {index}")
        if not 1 <= index <= len(self.result):
            raise ResultAccessError(f"index {index} out of range 1..{len(self.result)}")
        return self.result[index - 1]

    __getitem__ = get

    def get_float(self, index: int) -> float:
        val = self.get(index)
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ResultAccessError(f"entry {index} is not a number: {val!r}")
        return float(val)

    def get_int(self, index: int) -> int:
        val = self.get(index)
        if isinstance(val, bool) or not isinstance(val, int):
            raise ResultAccessError(f"entry {index} is not an integer: {val!r}")
        return val

    def get_str(self, index: int) -> str:
        val = self.get(index)
        if not isinstance(val, str):
            raise ResultAccessError(f"entry {index} is not a string: {val!r}")
        return val

    def get_list(self, index: int) -> list:
        val = self.get(index)
        if not isinstance(val, list):
            raise ResultAccessError(f"entry {index} is not a list: {val!r}")
        return val


def _new_state(parser: "Parser", tracer: Optional[Tracer]) -> State:
    if tracer is None and parser.debug_depth > 0:
        tracer = LoggingTracer()
    return State(parser.debug_depth, tracer)


def run(parser: "Parser", text: str, tracer: Optional[Tracer] = None) -> "Match":
    """Match parser against the start of text.

    Returns ``Match(matched, consumed, value)``. A partial match is still a
    match; compare `consumed` with ``len(text)`` if trailing input matters.
    """
    from .engine import invoke
    return invoke(parser, _new_state(parser, tracer), text, 0)


def run_full(parser: "Parser", text: str, tracer: Optional[Tracer] = None) -> Any:
    """Like run, but all of text (up to trailing whitespace) must match.

    Raises ParseError pointing at the farthest position any parser reached.
    """
    from .engine import invoke, skip_white
    state = _new_state(parser, tracer)
    matched, used, value = invoke(parser, state, text, 0)
    if matched:
        end = used + skip_white(state, text, used)
        if end == len(text):
            return value
        state.note_failure(end, "end of input")
    raise ParseError(text, state.farthest, state.expected)
