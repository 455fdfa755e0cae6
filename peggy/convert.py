# peggy/convert.py
"""Converters turn what a parser matched into a value.

Attach one with ``parser.convert(Float)``. Numeric converters are strict: text
that does not parse raises ConversionError, which the engine reports as a
failed match. Pass ``default=`` to substitute a value instead, e.g.
``FloatConverter(default=0.0)``.
"""

from __future__ import annotations
from typing import Any, List, TYPE_CHECKING

import regex

from .errors import ConversionError

if TYPE_CHECKING:
    from .runtime import State

_STRICT = object()


class Converter:
    """Objects with a convert(state) method may be passed to Parser.convert."""

    def convert(self, state: "State") -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class _NumberConverter(Converter):
    kind: type = float
    # plain ASCII decimal text only: no "_" separators, non-ASCII digits, nan or inf
    pattern = regex.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

    def __init__(self, default: Any = _STRICT):
        self.default = default

    def convert(self, state):
        if self.pattern.fullmatch(state.text):
            return self.kind(state.text)
        if self.default is _STRICT:
            raise ConversionError(f"{state.text!r} is not a valid {self.kind.__name__}")
        return self.default


class FloatConverter(_NumberConverter):
    kind = float


class IntConverter(_NumberConverter):
    kind = int
    pattern = regex.compile(r"[+-]?[0-9]+")


class StringConverter(Converter):
    def convert(self, state):
        return state.text


class StringsConverter(Converter):
    """For list results whose entries are all strings."""

    def convert(self, state) -> List[str]:
        return [state.get_str(i + 1) for i in range(len(state))]


Float = FloatConverter()
Int = IntConverter()
String = StringConverter()
Strings = StringsConverter()
