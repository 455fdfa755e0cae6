# peggy/engine.py
from __future__ import annotations
from typing import Any, Iterator, List, Set, Tuple

import regex

from .ast import (
    Parser, CharClass, AnyChar, Literal, Seq, Choice, Repeat, And, Not, Deferred,
    Match, NO_MATCH,
)
from .errors import NoMatch, UnboundDeferredError
from .runtime import State

# Invocation engine:
# - Every parser, leaf or combinator, is run through invoke().
# - invoke() skips leading whitespace (unless inside an adjacent region),
#   rejects empty input for parsers that cannot match empty, then applies
#   flattening and the handler to what the parser-specific rule returned.
# - Each nested parser costs two Python frames (invoke and _eval); deeply
#   nested input can exceed sys.getrecursionlimit() and raise RecursionError.
# - A failed match always reports zero consumption, so backtracking is free.
# - Positions are absolute offsets into text.

_WHITE = regex.compile(r"\p{White_Space}*")


def skip_white(state: State, text: str, pos: int) -> int:
    """Length of the whitespace run at pos, or 0 inside an adjacent region."""
    if state.no_skip:
        return 0
    return _WHITE.match(text, pos).end() - pos


def flatten(value: list, depth: int) -> list:
    """Collapse `depth` levels of nested lists (0 = all levels)."""
    out: List[Any] = []
    _flatten_into(out, value, depth + 1 if depth > 0 else -1)
    return out


def _flatten_into(out: List[Any], x: Any, depth: int) -> None:
    if depth == 0 or not isinstance(x, list):
        out.append(x)
        return
    for item in x:
        _flatten_into(out, item, depth - 1)


def _first_leaves(node: Parser, seen: Set[int]) -> Iterator[str]:
    """Descriptions of the leaf parsers that could match first inside node."""
    if id(node) in seen:
        return
    seen.add(id(node))
    if isinstance(node, Deferred):
        if node.delegate is not None:
            yield from _first_leaves(node.delegate, seen)
        return
    if not node.children:
        yield node.description
        return
    for child in node.children:
        yield from _first_leaves(child, seen)
        if isinstance(node, Seq) and not child.allow_empty:
            break


def invoke(node: Parser, state: State, text: str, pos: int) -> Match:
    tracing = state.debug > 0
    if tracing:
        state.tracer.enter(node, state.depth, text[pos:])
    state.depth += 1
    state.debug -= 1
    result = NO_MATCH
    try:
        if isinstance(node, Deferred):
            if node.delegate is None:
                raise UnboundDeferredError(f"{node.description} was never bound")
            result = invoke(node.delegate, state, text, pos)
            return result

        space = skip_white(state, text, pos)
        start = pos + space
        if start >= len(text) and not node.allow_empty:
            if start >= state.farthest:
                for desc in _first_leaves(node, set()):
                    state.note_failure(start, desc)
            return result

        if node.is_adjacent:
            state.no_skip += 1
        try:
            ok, used, value = _eval(node, state, text, start)
        finally:
            if node.is_adjacent:
                state.no_skip -= 1

        if not ok:
            if not node.children:
                state.note_failure(start, node.description)
            return result

        if node.flatten_depth is not None and isinstance(value, list):
            flat = flatten(value, node.flatten_depth)
            if tracing:
                state.tracer.flatten(state.depth, value, flat)
            value = flat

        if node.handler is not None:
            state.matched = text[start:start + used]
            state.result = value
            try:
                out = node.handler(state)
            except NoMatch:
                state.note_failure(start, node.description)
                return result
            if tracing:
                state.tracer.handler(state.depth, value, out)
            value = out

        result = Match(True, used + space, value)
        return result
    finally:
        state.depth -= 1
        state.debug += 1
        if tracing:
            state.tracer.exit(node, state.depth, result.matched, result.consumed, result.value)


def _repeat(state: State, parsers: List[Parser], text: str, pos: int) -> Tuple[int, List[Any]]:
    """Greedy loop shared by zero_or_more / one_or_more.

    Each round takes the first parser that matches at the cursor; the loop
    stops when no parser matches, or after a round that consumed nothing.
    """
    cur = pos
    results: List[Any] = []
    while True:
        for p in parsers:
            ok, used, value = invoke(p, state, text, cur)
            if ok:
                results.append(value)
                cur += used
                break
        else:
            return cur - pos, results
        if used == 0:
            return cur - pos, results


# ---- Parser-specific matching rules ----
def _eval(node: Parser, state: State, text: str, pos: int) -> Tuple[bool, int, Any]:
    if isinstance(node, Literal):
        if text.startswith(node.text, pos):
            return True, len(node.text), None
        return False, 0, None

    if isinstance(node, CharClass):
        # empty input is rejected in invoke before we get here
        if pos < len(text) and node.accepts(text[pos]):
            return True, 1, None
        return False, 0, None

    if isinstance(node, AnyChar):
        if pos < len(text):
            return True, 1, None
        return False, 0, None

    if isinstance(node, Seq):
        cur = pos
        results: List[Any] = []
        for it in node.children:
            ok, used, value = invoke(it, state, text, cur)
            if not ok:
                return False, 0, None
            cur += used
            results.append(value)
        return True, cur - pos, results

    if isinstance(node, Choice):
        for it in node.children:
            ok, used, value = invoke(it, state, text, pos)
            if ok:
                return True, used, value
        return False, 0, None

    if isinstance(node, Repeat):
        if node.kind == "?":
            ok, used, value = invoke(node.children[0], state, text, pos)
            if ok:
                return True, used, value
            return True, 0, None
        used, results = _repeat(state, node.children, text, pos)
        if node.kind == "+" and not results:
            return False, 0, None
        return True, used, results

    if isinstance(node, And):
        ok, _, _ = invoke(node.children[0], state, text, pos)
        return ok, 0, None

    if isinstance(node, Not):
        ok, _, _ = invoke(node.children[0], state, text, pos)
        return (not ok), 0, None

    raise AssertionError(f"unknown node: {node!r}")
