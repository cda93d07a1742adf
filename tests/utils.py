"""Test utilities for the mdpress test suite.

This module provides temporary directory helpers, config file writers and
a fake engine for exercising the orchestrator without mistune.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Mapping

from mdpress.pipeline import EngineConfig

SAMPLE_MARKDOWN = """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.

## Section 2

Here is a list:
- Item 1
- Item 2

| Header 1 | Header 2 |
|----------|----------|
| Row 1    | Data 1   |
"""


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil

    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def write_json_config(directory: Path, data: Mapping[str, Any], name: str = "mdpress.json") -> Path:
    """Write ``data`` as a JSON config file and return its path."""
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class CountingRenderer:
    """Stand-in for :func:`mdpress.engine.render` that records its calls."""

    def __init__(self, output: bytes = b"rendered"):
        self.output = output
        self.calls: list[tuple[bytes, EngineConfig]] = []

    def __call__(self, source: bytes, config: EngineConfig) -> bytes:
        self.calls.append((source, config))
        return self.output + b"#" + str(len(self.calls)).encode("ascii")
