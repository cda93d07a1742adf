"""Unit tests for typographic substitutions."""

import pytest

from mdpress.renderers.typography import (
    educate,
    educate_dashes,
    educate_ellipses,
    educate_quotes,
    replace_fractions,
)


@pytest.mark.unit
class TestDashes:
    """Test dash education in both styles."""

    def test_latex_dashes(self):
        assert educate_dashes("pages 1--5", latex_dashes=True) == "pages 1–5"
        assert educate_dashes("wait---what", latex_dashes=True) == "wait—what"

    def test_plain_dashes(self):
        assert educate_dashes("wait--what", latex_dashes=False) == "wait—what"
        assert educate_dashes("wait---what", latex_dashes=False) == "wait—-what"
        assert educate_dashes("a----b", latex_dashes=False) == "a——b"

    def test_single_hyphen_untouched(self):
        assert educate_dashes("well-known") == "well-known"
        assert educate_dashes("well-known", latex_dashes=False) == "well-known"

    def test_long_runs_scan_left_to_right(self):
        assert educate_dashes("a ---- b") == "a —- b"
        assert educate_dashes("a ----- b") == "a —– b"


@pytest.mark.unit
class TestQuotes:
    """Test quote education."""

    def test_double_quotes(self):
        assert educate_quotes('"Hi"') == "“Hi”"
        assert educate_quotes('She said "Hi" to me') == "She said “Hi” to me"

    def test_apostrophes(self):
        assert educate_quotes("don't") == "don’t"
        assert educate_quotes("it's") == "it’s"

    def test_single_quotes(self):
        assert educate_quotes("say 'hi' now") == "say ‘hi’ now"

    def test_decade_abbreviation(self):
        assert educate_quotes("the '80s") == "the ’80s"


@pytest.mark.unit
class TestEllipsesAndFractions:
    """Test ellipses and fraction handling."""

    def test_ellipsis(self):
        assert educate_ellipses("wait...") == "wait…"
        assert educate_ellipses("wait....") == "wait...."

    def test_common_fractions(self):
        assert replace_fractions("1/2 cup", improved=False) == "&frac12; cup"
        assert replace_fractions("3/4 and 1/4", improved=False) == "&frac34; and &frac14;"

    def test_uncommon_fraction_needs_improved_rules(self):
        assert replace_fractions("3/8 inch", improved=False) == "3/8 inch"
        assert replace_fractions("3/8 inch", improved=True) == "<sup>3</sup>&frasl;<sub>8</sub> inch"

    def test_dates_and_paths_untouched(self):
        assert replace_fractions("1/2/2025", improved=True) == "1/2/2025"
        assert replace_fractions("a1/2", improved=True) == "a1/2"


@pytest.mark.unit
class TestEducate:
    """Test the combined pass."""

    def test_combined(self):
        assert educate('"Hi" -- 1/2') == "“Hi” – <sup>1</sup>&frasl;<sub>2</sub>"

    def test_output_is_escaped(self):
        assert educate("a < b & c") == "a &lt; b &amp; c"

    def test_plain_dash_style(self):
        assert educate("a--b", latex_dashes=False) == "a—b"

    def test_common_fractions_only(self):
        assert educate("1/2 of 3/8", fractions=False) == "&frac12; of 3/8"
