import pytest

from patchforge.utils.text import (
    cleanup_llm_output,
    compare_two_strings,
    normalize_whitespace,
    strip_numerals,
    tokenize,
)


def test_cleanup_llm_output_removes_think_blocks():
    content = "<think>Should I use recursion? No.</think>def factorial(n):..."
    assert cleanup_llm_output(content) == "def factorial(n):..."


def test_cleanup_llm_output_multiline_think():
    content = "<think>\nStep 1\nStep 2\n</think>\nResult"
    assert cleanup_llm_output(content) == "\nResult"


def test_cleanup_llm_output_none_safe():
    assert cleanup_llm_output(None) == ""


def test_normalize_whitespace_collapses_runs():
    assert normalize_whitespace("  a \n\t b   c  ") == "a b c"


def test_strip_numerals_drops_digits_percent_and_parenthesised_numbers():
    assert strip_numerals("grew 12% (3) in 2024") == "grew   in "


def test_tokenize_lowercases_and_skips_stop_words():
    assert tokenize("The Cat sat on the MAT, and left.") == ["cat", "sat", "mat", "left"]


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("same text", "same   text", 1.0),
        ("a", "b", 0.0),
        ("abcde", "abcdx", 0.75),
        ("night", "nacht", 0.25),
        ("", "abc", 0.0),
    ],
)
def test_compare_two_strings(first, second, expected):
    assert compare_two_strings(first, second) == pytest.approx(expected)


def test_compare_two_strings_counts_repeated_bigrams_once_each():
    # "aaaa" has three "aa" bigrams, "aa" only one
    assert compare_two_strings("aaaa", "aa") == pytest.approx(2 * 1 / 4)
