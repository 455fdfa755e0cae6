# peggy/__init__.py
"""PEG parser combinators.

This package provides:
- Parser nodes and the constructors/decorators used to compose them
- The invocation engine (whitespace skipping, adjacency, flattening, handlers)
- Converters for common result types
- Optional tracing through the standard logging module

Grammars are written directly in Python:

    digits = one_or_more(any_of("0123456789")).adjacent().convert(Int)
    pair = sequence(digits, ",", digits).handle(lambda s: (s.get(1), s.get(3)))
    pair.parse("1, 2")   # Match(matched=True, consumed=4, value=(1, 2))
"""

from .ast import (
    Match, Parser, Deferred,
    any_of, none_of, char_range, any_char, literal,
    sequence, one_of, zero_or_more, one_or_more, optional,
    followed_by, not_followed_by, deferred,
)
from .convert import (
    Converter, FloatConverter, IntConverter, StringConverter, StringsConverter,
    Float, Int, String, Strings,
)
from .errors import (
    PeggyError, GrammarError, UnboundDeferredError, AlreadyBoundError,
    ResultAccessError, NoMatch, ConversionError, ParseError,
)
from .runtime import State
from .trace import Tracer, NullTracer, LoggingTracer
