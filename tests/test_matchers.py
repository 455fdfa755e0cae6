"""
Leaf matcher tests: literals, character classes, whitespace skipping
"""

import pytest

from peggy import (
  literal, any_of, none_of, char_range, any_char, GrammarError,
)


class TestLiteral:
  """Literal matching"""

  def test_round_trip(self):
    assert literal("hello").parse("hello") == (True, 5, "hello")

  def test_matches_prefix_only(self):
    assert literal("ab").parse("abc") == (True, 2, "ab")

  def test_counts_characters_not_bytes(self):
    assert literal("héllo→").parse("héllo→ x") == (True, 6, "héllo→")

  def test_mismatch(self):
    assert literal("abc").parse("abd") == (False, 0, None)

  def test_input_shorter_than_target(self):
    assert literal("abc").parse("ab") == (False, 0, None)

  def test_leading_whitespace_is_consumed_but_not_returned(self):
    assert literal("a").parse("  a") == (True, 3, "a")

  def test_empty_literal_matches_empty_input(self):
    assert literal("").parse("") == (True, 0, "")

  def test_non_empty_literal_rejects_empty_input(self):
    assert literal("a").parse("") == (False, 0, None)
    assert literal("a").parse("   ") == (False, 0, None)

  def test_non_string_rejected(self):
    with pytest.raises(GrammarError):
      literal(42)


class TestCharClass:
  """any_of / none_of / char_range / any_char"""

  def test_any_of(self):
    p = any_of("abc")
    assert p.parse("b") == (True, 1, None)
    assert p.parse("bc") == (True, 1, None)
    assert p.parse("x") == (False, 0, None)

  def test_any_of_on_empty_input(self):
    assert any_of("abc").parse("") == (False, 0, None)

  def test_none_of(self):
    p = none_of("abc")
    assert p.parse("x") == (True, 1, None)
    assert p.parse("a") == (False, 0, None)
    assert p.parse("") == (False, 0, None)

  def test_char_range(self):
    p = char_range("a", "z", "0", "9")
    assert p.parse("q") == (True, 1, None)
    assert p.parse("7") == (True, 1, None)
    assert p.parse("Q") == (False, 0, None)

  def test_negated_char_range(self):
    p = char_range("a", "z", negated=True)
    assert p.parse("Q") == (True, 1, None)
    assert p.parse("q") == (False, 0, None)

  @pytest.mark.parametrize("bounds", [("a",), ("ab", "z"), ()])
  def test_bad_range_bounds(self, bounds):
    with pytest.raises(GrammarError):
      char_range(*bounds)

  def test_any_char(self):
    assert any_char().parse("→") == (True, 1, None)
    assert any_char().parse("") == (False, 0, None)

  def test_describe_labels(self):
    assert any_of("ab").description == "AnyOf(ab)"
    assert char_range("a", "f").description == "Range(a-f)"


class TestWhitespace:
  """Unicode whitespace is skipped before each parser"""

  def test_unicode_spaces(self):
    assert literal("x").parse("\u3000\u00a0\tx") == (True, 4, "x")

  def test_zero_width_space_is_not_whitespace(self):
    assert literal("x").parse("\u200bx") == (False, 0, None)

  def test_newlines(self):
    assert literal("x").parse("\n\r\n x") == (True, 5, "x")
