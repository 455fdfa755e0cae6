# peggy/trace.py
"""Trace sinks.

The engine reports parser entry/exit, flattening and handler calls to a
tracer, but only while the session still has debug depth left (see
`Parser.debug`). Tracers observe; they never influence a match.
"""

from __future__ import annotations
import logging
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .ast import Parser

log = logging.getLogger("peggy")


class Tracer:
    """No-op base; subclass and override what you need."""

    def enter(self, parser: "Parser", depth: int, rest: str) -> None:
        pass

    def exit(self, parser: "Parser", depth: int, matched: bool, used: int, result: Any) -> None:
        pass

    def flatten(self, depth: int, before: Any, after: Any) -> None:
        pass

    def handler(self, depth: int, before: Any, after: Any) -> None:
        pass


NullTracer = Tracer


class LoggingTracer(Tracer):
    """Writes DEBUG records to the "peggy" logger, indented by depth."""

    def __init__(self, logger: logging.Logger = log, indent: int = 4):
        self.logger = logger
        self.indent = indent

    def _pad(self, depth: int) -> str:
        return " " * (depth * self.indent)

    def enter(self, parser, depth, rest):
        self.logger.debug("%s-> %s on %r", self._pad(depth), parser.description, rest)

    def exit(self, parser, depth, matched, used, result):
        self.logger.debug("%s<- %s %s, len=%d, result=%r",
                          self._pad(depth), parser.description, matched, used, result)

    def flatten(self, depth, before, after):
        self.logger.debug("%sflatten %r -> %r", self._pad(depth), before, after)

    def handler(self, depth, before, after):
        self.logger.debug("%shandler %r => %r", self._pad(depth), before, after)
