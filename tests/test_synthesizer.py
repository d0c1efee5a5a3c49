"""Tests for scalar mock value synthesis."""

import json
import re

import pytest

from fragment_factories.synthesizer import MockValueSynthesizer, quote


@pytest.fixture
def synthesizer():
    return MockValueSynthesizer(seed=0)


class TestMockValueSynthesizer:
    """Tests for MockValueSynthesizer."""

    def test_same_field_same_value(self, synthesizer):
        """Test that a field always receives the same literal."""
        first = synthesizer.synthesize("String", "email")
        synthesizer.synthesize("String", "city")
        assert synthesizer.synthesize("String", "email") == first

    def test_deterministic_across_instances(self):
        a = MockValueSynthesizer(seed=7)
        b = MockValueSynthesizer(seed=7)

        for scalar, name in [("String", "firstName"), ("Int", "count"), ("DateTime", "createdAt")]:
            assert a.synthesize(scalar, name) == b.synthesize(scalar, name)

    def test_email(self, synthesizer):
        value = json.loads(synthesizer.synthesize("String", "contactEmail"))
        assert re.fullmatch(r"[^@\s]+@[^@\s]+\.[a-z]+", value)

    def test_url(self, synthesizer):
        value = json.loads(synthesizer.synthesize("String", "avatarUrl"))
        assert value.startswith("http")

    def test_plain_string_is_quoted(self, synthesizer):
        literal = synthesizer.synthesize("String", "title")

        assert literal.startswith('"') and literal.endswith('"')
        assert json.loads(literal)

    def test_int(self, synthesizer):
        literal = synthesizer.synthesize("Int", "count")
        assert 0 <= int(literal) <= 1000

    def test_float_has_two_decimals(self, synthesizer):
        literal = synthesizer.synthesize("Float", "score")
        assert re.fullmatch(r"\d+\.\d{2}", literal)

    def test_boolean(self, synthesizer):
        assert synthesizer.synthesize("Boolean", "active") in ("true", "false")

    @pytest.mark.parametrize("scalar", ["Date", "DateTime"])
    def test_dates_are_iso_strings(self, synthesizer, scalar):
        value = json.loads(synthesizer.synthesize(scalar, "createdAt"))

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.000Z", value)
        assert "2020" <= value[:4] <= "2025"

    def test_custom_scalar(self, synthesizer):
        """Test that unknown scalars get a named placeholder."""
        assert synthesizer.synthesize("JSON", "metaData") == '"mock-metadata"'


class TestQuote:
    def test_escapes(self):
        assert quote('say "hi"') == '"say \\"hi\\""'

    def test_non_ascii_kept(self):
        assert quote("Zoë") == '"Zoë"'
