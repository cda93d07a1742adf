"""Integration tests for the mdpress command line.

These run :func:`mdpress.cli.main` end to end with real config files, real
input files and the real engine, checking exit codes and the bytes written.
"""

import io
import json

import pytest
from utils import write_json_config

from mdpress.cli import load_settings, main
from mdpress.cli.builder import resolve_flags
from mdpress.constants import EXIT_ERROR, EXIT_SUCCESS, GENERATOR_NAME
from mdpress.normalize import normalize

pytestmark = [pytest.mark.integration, pytest.mark.cli, pytest.mark.usefixtures("restore_logging")]


@pytest.fixture
def stdin(monkeypatch):
    """Replace standard input with the given bytes."""

    def set_stdin(data: bytes) -> None:
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))

    return set_stdin


@pytest.fixture
def markdown_file(temp_dir, sample_markdown):
    path = temp_dir / "doc.md"
    path.write_text(sample_markdown, encoding="utf-8")
    return path


class TestStandardStreams:
    """Test stdin to stdout conversions."""

    def test_empty_input(self, isolated_config, stdin, capsys):
        stdin(b"")

        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""

    def test_fragment(self, isolated_config, stdin, capsys):
        stdin(b"# Hello\n\nSome *text*.\n")

        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "<h1>Hello</h1>\n<p>Some <em>text</em>.</p>\n"

    def test_title_overrides_latex(self, isolated_config, stdin, capsys):
        stdin(b"body\n")

        assert main(["--title", "Report", "--latex"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("<!DOCTYPE html PUBLIC")
        assert "<title>Report</title>" in out
        assert f'content="{GENERATOR_NAME}"' in out
        assert "\\documentclass" not in out

    def test_latex(self, isolated_config, stdin, capsys):
        stdin(b"# Hi\n")

        assert main(["--latex"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("\\documentclass{article}")
        assert "\\section{Hi}" in out

    def test_toc_only(self, isolated_config, stdin, capsys):
        stdin(b"# One\n\nBody text.\n")

        assert main(["--toconly"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("<nav>")
        assert '<a href="#toc_1">One</a>' in out
        assert "Body text." not in out

    def test_html_void_tags(self, isolated_config, stdin, capsys):
        stdin(b"a  \nb\n")

        assert main(["--no-xhtml"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "<p>a<br>\nb</p>\n"


class TestFiles:
    """Test conversions with positional file arguments."""

    def test_input_file_to_stdout(self, isolated_config, markdown_file, capsys):
        assert main([str(markdown_file)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert '<h1>Sample Document</h1>' in out
        assert "<table>" in out
        # The filename fallback title never turns a fragment into a page
        assert "<html" not in out

    def test_input_file_names_the_page(self, isolated_config, markdown_file, temp_dir):
        target = temp_dir / "out.html"

        assert main(["--page", str(markdown_file), str(target)]) == EXIT_SUCCESS
        assert f"<title>{markdown_file}</title>" in target.read_text(encoding="utf-8")

    def test_latex_file_keeps_latex(self, isolated_config, markdown_file, temp_dir):
        target = temp_dir / "out.tex"

        assert main(["--latex", str(markdown_file), str(target)]) == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8").startswith("\\documentclass{article}")

    def test_repeat_writes_single_render(self, isolated_config, markdown_file, temp_dir):
        once = temp_dir / "once.html"
        many = temp_dir / "many.html"

        assert main([str(markdown_file), str(once)]) == EXIT_SUCCESS
        assert main(["--repeat", "4", str(markdown_file), str(many)]) == EXIT_SUCCESS
        assert many.read_bytes() == once.read_bytes()

    def test_cpu_profile(self, isolated_config, markdown_file, temp_dir, capsys):
        profile = temp_dir / "cpu.prof"

        assert main(["--cpuprofile", str(profile), str(markdown_file)]) == EXIT_SUCCESS
        assert profile.stat().st_size > 0

    def test_missing_input(self, isolated_config, temp_dir, capsys):
        target = temp_dir / "out.html"

        assert main([str(temp_dir / "missing.md"), str(target)]) == EXIT_ERROR
        assert "Error reading from" in capsys.readouterr().err
        assert not target.exists()

    def test_uncreatable_output(self, isolated_config, markdown_file, temp_dir, capsys):
        target = temp_dir / "no-such-dir" / "out.html"

        assert main([str(markdown_file), str(target)]) == EXIT_ERROR
        assert "Error creating" in capsys.readouterr().err


class TestUsage:
    """Test command-line errors."""

    def test_three_positionals(self, isolated_config, temp_dir, capsys):
        target = temp_dir / "c.html"

        assert main(["a.md", "b.html", str(target)]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert "Error: " in captured.err
        assert GENERATOR_NAME in captured.err
        assert captured.out == ""
        assert not target.exists()

    def test_usage_error_is_first_line_without_config(self, isolated_config, capsys):
        assert main(["--no-config", "a.md", "b.html", "c.html"]) == EXIT_ERROR
        assert capsys.readouterr().err.startswith("Error: ")

    def test_zero_repeat(self, isolated_config, capsys):
        assert main(["--repeat", "0"]) == EXIT_ERROR
        assert "positive" in capsys.readouterr().err

    def test_help(self, isolated_config, capsys):
        assert main(["--help"]) == EXIT_SUCCESS
        assert "--cpuprofile" in capsys.readouterr().err

    def test_version(self, isolated_config, capsys):
        assert main(["--version"]) == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert "mdpress 1.4.0" in captured.err
        assert captured.out == ""


class TestConfigLayers:
    """Test config file and flag precedence."""

    def test_config_enables_toc(self, isolated_config, stdin, capsys):
        write_json_config(isolated_config, {"toc": True})
        stdin(b"# One\n")

        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("<nav>")

    def test_flag_overrides_config(self, isolated_config, stdin, capsys):
        write_json_config(isolated_config, {"toc": True})
        stdin(b"# One\n")

        assert main(["--no-toc"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "<h1>One</h1>\n"

    def test_no_config_flag(self, isolated_config, stdin, capsys):
        write_json_config(isolated_config, {"toc": True})
        stdin(b"# One\n")

        assert main(["--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "<h1>One</h1>\n"

    def test_env_config_path(self, isolated_config, temp_dir, stdin, capsys, monkeypatch):
        config = temp_dir / "custom.yaml"
        config.write_text("latex: true\n", encoding="utf-8")
        monkeypatch.setenv("MDPRESS_CONFIG", str(config))
        stdin(b"text\n")

        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("\\documentclass")

    def test_explicit_config_flag(self, isolated_config, temp_dir, stdin, capsys):
        config = temp_dir / "custom.toml"
        config.write_text('title = "From TOML"\n', encoding="utf-8")
        stdin(b"text\n")

        assert main(["--config", str(config)]) == EXIT_SUCCESS
        assert "<title>From TOML</title>" in capsys.readouterr().out

    def test_malformed_config_warns_and_continues(self, isolated_config, stdin, capsys):
        (isolated_config / "mdpress.json").write_text("{not json", encoding="utf-8")
        stdin(b"text\n")

        assert main([]) == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert captured.out == "<p>text</p>\n"
        assert "Invalid JSON" in captured.err

    def test_type_mismatch_keeps_earlier_keys(self, isolated_config, stdin, capsys):
        (isolated_config / "mdpress.json").write_text(
            json.dumps({"toconly": True, "repeat": "many"}), encoding="utf-8"
        )
        stdin(b"# One\n\ntext\n")

        assert main([]) == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert captured.out.startswith("<nav>")
        assert "text" not in captured.out
        assert "repeat" in captured.err

    def test_missing_config_is_not_an_error(self, isolated_config, stdin, capsys):
        stdin(b"text\n")

        assert main([]) == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert captured.out == "<p>text</p>\n"
        assert "config file not found" in captured.err

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_repeat_in_config_is_rejected(self, isolated_config, count, caplog):
        write_json_config(isolated_config, {"toc": True, "repeat": count})

        settings = load_settings()
        resolve_flags(settings, [])
        normalize(settings)

        assert settings.toc is True
        assert settings.repeat == 1
        assert "at least 1" in caplog.text
