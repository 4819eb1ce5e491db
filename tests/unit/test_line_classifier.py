"""Unit tests for diagnostic line cleaning and classification."""

from __future__ import annotations

import pytest

from cargo_check_i18n.text.classifier import should_translate, strip_ansi


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("warning: unused variable: `x`", True),
        ("  --> src/main.rs:10:5", False),
        ("10 | let x = 5;", False),
        ("help: consider removing this", True),
        ("error[E0308]: mismatched types", True),
        ("   = note: `#[warn(unused_variables)]` on by default", True),
        ("   Compiling demo v0.1.0 (/tmp/demo)", False),
        ("    Checking demo v0.1.0 (/tmp/demo)", False),
        ("    Finished `dev` profile [unoptimized + debuginfo] target(s) in 0.31s", False),
        ("|", False),
        ("   |", False),
        ("   |     let x = 5;", False),
        ("   |         ^ help: if this is intentional, prefix it with an underscore", True),
        ("   |     ^^^ expected `u32`, found `i32`", True),
        ("   |  ------- expected due to this", True),
        ("short", False),
        ("some plain prose from the compiler output", True),
    ],
)
def test_should_translate_truth_table(line: str, expected: bool) -> None:
    """Classifier should separate diagnostic prose from code-frame decoration."""

    assert should_translate(line) is expected


def test_should_translate_rejects_long_lines_without_letters() -> None:
    """Long punctuation/digit runs are not prose and must not be translated."""

    line = ("1234567890.,;:" * 20)[:200]

    assert len(line) == 200
    assert should_translate(line) is False


def test_should_translate_length_bounds_are_exclusive() -> None:
    """Keyword-free lines must be strictly longer than 15 and shorter than 120 chars."""

    assert should_translate("a" * 15) is False
    assert should_translate("a" * 16) is True
    assert should_translate("a" * 119) is True
    assert should_translate("a" * 120) is False


def test_should_translate_keyword_overrides_length_bounds() -> None:
    """Lines containing a diagnostic keyword are included regardless of length."""

    assert should_translate("note") is True
    assert should_translate("error " + "x" * 200) is True


def test_should_translate_is_pure() -> None:
    """Repeated calls with identical input should return identical results."""

    lines = ["warning: unused import", "10 | fn main() {}", "x" * 40, ""]

    first = [should_translate(line) for line in lines]
    second = [should_translate(line) for line in lines]

    assert first == second


def test_strip_ansi_removes_color_and_hyperlink_sequences() -> None:
    """Escape stripping should leave only the visible diagnostic text."""

    colored = "\x1b[0m\x1b[1m\x1b[33mwarning\x1b[0m\x1b[0m\x1b[1m: unused variable\x1b[0m"
    linked = "\x1b]8;;file:///src/main.rs\x1b\\src/main.rs\x1b]8;;\x1b\\"

    assert strip_ansi(colored) == "warning: unused variable"
    assert strip_ansi(linked) == "src/main.rs"


def test_colored_gutter_line_is_excluded_after_stripping() -> None:
    """A code-frame line stays excluded once its color codes are removed."""

    raw = "\x1b[0m\x1b[1m\x1b[38;5;12m10\x1b[0m \x1b[0m\x1b[1m\x1b[38;5;12m|\x1b[0m let x = 5;"

    assert should_translate(strip_ansi(raw)) is False
