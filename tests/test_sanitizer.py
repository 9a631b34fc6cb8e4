"""Unit tests for the input sanitizer."""

import pytest

from promptchat.core.exceptions import ValidationError
from promptchat.modules.prompts import InputSanitizer


@pytest.fixture
def sanitizer() -> InputSanitizer:
    return InputSanitizer(min_length=5, max_length=2000)


class TestValidate:
    def test_trims_and_collapses_whitespace(self, sanitizer):
        assert sanitizer.validate("  Explain   rainfall\n\tpatterns  ") == "Explain rainfall patterns"

    def test_accepts_minimum_length(self, sanitizer):
        assert sanitizer.validate("abcde") == "abcde"

    def test_accepts_maximum_length(self, sanitizer):
        value = "a" * 2000
        assert sanitizer.validate(value) == value

    @pytest.mark.parametrize("value", ["", "abcd", "   abc   ", "\n\t  \n"])
    def test_rejects_short_input_after_trimming(self, sanitizer, value):
        with pytest.raises(ValidationError) as exc_info:
            sanitizer.validate(value)
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("value", ["a     b", "a \n\t b", "  ab    c  "])
    def test_rejects_input_too_short_after_collapsing(self, sanitizer, value):
        with pytest.raises(ValidationError, match="at least 5"):
            sanitizer.validate(value)

    @pytest.mark.parametrize("value", ["ab   cd", "a  b  c", "  hi \t\n there "])
    def test_result_is_never_shorter_than_minimum(self, sanitizer, value):
        assert len(sanitizer.validate(value)) >= sanitizer.min_length

    def test_rejects_raw_input_over_limit_even_if_trimmed_fits(self, sanitizer):
        """The upper bound is checked before trimming."""
        with pytest.raises(ValidationError):
            sanitizer.validate("  " + "a" * 1999)

    @pytest.mark.parametrize("value", [None, 12345, ["hello world"]])
    def test_rejects_non_string_input(self, sanitizer, value):
        with pytest.raises(ValidationError, match="required"):
            sanitizer.validate(value)

    def test_result_never_contains_whitespace_runs(self, sanitizer):
        result = sanitizer.validate("one  two  three \r\n four")
        assert "  " not in result
        assert result == "one two three four"

    def test_custom_bounds(self):
        sanitizer = InputSanitizer(min_length=2, max_length=10)
        assert sanitizer.validate(" ok ") == "ok"
        with pytest.raises(ValidationError):
            sanitizer.validate("x" * 11)
