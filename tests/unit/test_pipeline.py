"""Unit tests for building the engine configuration from settings."""

import dataclasses

import pytest

from mdpress.normalize import normalize
from mdpress.pipeline import (
    COMMON_EXTENSIONS,
    EngineConfig,
    Extension,
    HtmlFlag,
    RendererKind,
    build_engine_config,
    build_extensions,
    build_html_flags,
)
from mdpress.settings import Settings


@pytest.mark.unit
class TestBuildExtensions:
    """Test extension selection."""

    def test_common_extensions(self):
        extensions = build_extensions(Settings())

        assert extensions == COMMON_EXTENSIONS
        for extension in (
            Extension.NO_INTRA_EMPHASIS,
            Extension.TABLES,
            Extension.FENCED_CODE,
            Extension.AUTOLINK,
            Extension.STRIKETHROUGH,
            Extension.SPACE_HEADERS,
        ):
            assert extension in extensions
        assert Extension.FOOTNOTES not in extensions

    def test_footnotes(self):
        assert Extension.FOOTNOTES in build_extensions(Settings(footnotes=True))


@pytest.mark.unit
class TestBuildHtmlFlags:
    """Test HTML flag selection."""

    def test_defaults(self):
        flags = build_html_flags(Settings())

        assert flags == (
            HtmlFlag.USE_XHTML
            | HtmlFlag.USE_SMARTYPANTS
            | HtmlFlag.SMARTYPANTS_FRACTIONS
            | HtmlFlag.SMARTYPANTS_LATEX_DASHES
        )

    def test_no_xhtml(self):
        assert HtmlFlag.USE_XHTML not in build_html_flags(Settings(xhtml=False))

    def test_smartypants_sub_flags_need_smartypants(self):
        flags = build_html_flags(Settings(smartypants=False, fractions=True, latex_dashes=True))

        assert HtmlFlag.USE_SMARTYPANTS not in flags
        assert HtmlFlag.SMARTYPANTS_FRACTIONS not in flags
        assert HtmlFlag.SMARTYPANTS_LATEX_DASHES not in flags

    def test_smartypants_sub_flags_individually(self):
        flags = build_html_flags(Settings(fractions=False))

        assert HtmlFlag.SMARTYPANTS_FRACTIONS not in flags
        assert HtmlFlag.SMARTYPANTS_LATEX_DASHES in flags

    def test_page_and_toc(self):
        flags = build_html_flags(normalize(Settings(page=True, toc_only=True)))

        assert HtmlFlag.COMPLETE_PAGE in flags
        assert HtmlFlag.TOC in flags
        assert HtmlFlag.OMIT_CONTENTS in flags


@pytest.mark.unit
class TestBuildEngineConfig:
    """Test the full translation."""

    def test_html_config_carries_title_and_css(self):
        config = build_engine_config(normalize(Settings(title="Doc", css="style.css")))

        assert config.renderer is RendererKind.HTML
        assert config.title == "Doc"
        assert config.css == "style.css"
        assert config.has_flag(HtmlFlag.COMPLETE_PAGE)

    def test_latex_ignores_html_options(self):
        settings = Settings(latex=True, xhtml=True, smartypants=True, footnotes=True)
        config = build_engine_config(settings)

        assert config.renderer is RendererKind.LATEX
        assert config.html_flags == HtmlFlag.NONE
        assert config.title == ""
        assert config.css == ""
        assert config.has_extension(Extension.FOOTNOTES)

    def test_does_not_modify_settings(self):
        settings = Settings(toc_only=True)
        build_engine_config(settings)

        assert settings == Settings(toc_only=True)

    def test_config_is_immutable(self):
        config = build_engine_config(Settings())

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.title = "changed"  # type: ignore[misc]

    def test_describe(self):
        description = EngineConfig(html_flags=HtmlFlag.TOC).describe()

        assert description["renderer"] == "html"
        assert description["html_flags"] == ["TOC"]
        assert "TABLES" in description["extensions"]
        assert "NONE" not in description["extensions"]
