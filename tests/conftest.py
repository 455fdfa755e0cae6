"""
Shared grammars for the peggy tests
"""

import pytest

from peggy import (
    any_of, literal, sequence, one_of, zero_or_more, one_or_more, optional,
    deferred, Float,
)


LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_"
DIGITS = "0123456789"


@pytest.fixture
def identifier():
  """letter (letter | digit)* with no whitespace inside"""
  letter = any_of(LETTERS)
  digit = any_of(DIGITS)
  return sequence(letter, zero_or_more(one_of(letter, digit))).adjacent() \
    .describe("identifier").handle(lambda s: s.text)


def _make_op(s):
  op = s.get_str(1)
  rhs = s.get_float(2)

  def apply(lhs):
    if op == "+":
      return lhs + rhs
    if op == "-":
      return lhs - rhs
    if op == "*":
      return lhs * rhs
    if op == "/":
      return lhs / rhs
    raise AssertionError(f"bad op: {op}")
  return apply


def _eval_ops(s):
  val = s.get_float(1)
  for i in range(2, len(s) + 1):
    val = s.get(i)(val)
  return val


@pytest.fixture
def calculator():
  """
  expr1 := expr2 ( ('+' | '-') expr2 )*
  expr2 := expr3 ( ('*' | '/') expr3 )*
  expr3 := number | '(' expr1 ')'

  Built in reverse order, with a deferred parser for the recursive expr1.
  """
  digits = one_or_more(any_of(DIGITS)).adjacent().describe("digits")

  # 3, 3.5, .5
  number = one_of(sequence(optional(digits), ".", digits), digits) \
    .adjacent().describe("number").convert(Float)

  expr1 = deferred()
  expr3 = one_of(number, sequence("(", expr1, ")").pick(2)).describe("expr3")

  mul_ops = zero_or_more(
    sequence(one_of("*", "/"), expr3).describe("mulop").handle(_make_op)
  ).describe("mulops")
  expr2 = sequence(expr3, mul_ops).flatten(1).describe("expr2").handle(_eval_ops)

  add_ops = zero_or_more(
    sequence(one_of("+", "-"), expr2).describe("addop").handle(_make_op)
  ).describe("addops")
  expr1.bind(sequence(expr2, add_ops).flatten(1).describe("expr1").handle(_eval_ops))
  return expr1
