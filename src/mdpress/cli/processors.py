#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Run orchestration for the mdpress CLI.

This module moves bytes around the engine: it reads the whole input, calls
the renderer the requested number of times, and writes the last result.
The optional CPU profile is a scoped resource that is always stopped and
flushed, whatever way the run ends.

Nothing is written to the output until rendering has finished, so a failed
run leaves no partial output behind.
"""

from __future__ import annotations

import cProfile
import io
import logging
import marshal
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Callable, Iterator, Optional

from mdpress.cli.timing import RenderTimer, TimingContext
from mdpress.engine import render
from mdpress.exceptions import InputReadError, OutputWriteError
from mdpress.pipeline import EngineConfig
from mdpress.settings import Settings

logger = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"
STDOUT_NAME = "<stdout>"

RenderFunc = Callable[[bytes, EngineConfig], bytes]


@contextmanager
def profiling_scope(profile_path: str) -> Iterator[Optional[cProfile.Profile]]:
    """Profile the enclosed block and write the stats to ``profile_path``.

    The target file is created before profiling starts. If it cannot be
    created, or the profiler cannot be started, a warning is logged and the
    block runs unprofiled. Once started, profiling is stopped and the stats
    written on every exit path.

    Parameters
    ----------
    profile_path : str
        Output path; an empty string disables profiling

    Yields
    ------
    cProfile.Profile or None
        The active profiler, or None when profiling is off

    """
    if not profile_path:
        yield None
        return

    try:
        handle = open(profile_path, "wb")
    except OSError as e:
        logger.warning("Could not create cpu profile %s: %s", profile_path, e)
        yield None
        return

    with handle:
        profiler = cProfile.Profile()
        try:
            profiler.enable()
            started = True
        except ValueError as e:
            # Another profiler is already active
            logger.warning("Could not start cpu profile %s: %s", profile_path, e)
            started = False

        if not started:
            yield None
            return

        logger.debug("Writing cpu profile to %s", profile_path)
        try:
            yield profiler
        finally:
            profiler.disable()
            profiler.create_stats()
            # Same format as Profile.dump_stats, readable by pstats
            marshal.dump(profiler.stats, handle)


def _binary_stream(stream: Any) -> Any:
    return getattr(stream, "buffer", stream)


def read_input(input_path: Optional[str] = None, stdin: Optional[IO[Any]] = None) -> bytes:
    """Read the whole input payload.

    Parameters
    ----------
    input_path : str, optional
        File to read; standard input when None
    stdin : IO, optional
        Stream to use instead of ``sys.stdin``

    Returns
    -------
    bytes
        Raw input

    Raises
    ------
    InputReadError
        If the source cannot be read

    """
    if input_path is None:
        stream = stdin if stdin is not None else sys.stdin
        try:
            data = _binary_stream(stream).read()
        except (OSError, ValueError) as e:
            raise InputReadError(STDIN_NAME, original_error=e) from e
        return data.encode("utf-8") if isinstance(data, str) else data

    try:
        return Path(input_path).read_bytes()
    except OSError as e:
        raise InputReadError(input_path, original_error=e) from e


def render_repeatedly(
    source: bytes, config: EngineConfig, repeat: int, renderer: RenderFunc = render
) -> bytes:
    """Render ``source`` ``repeat`` times and return the last output.

    Earlier outputs are discarded; they only exist for timing.

    Parameters
    ----------
    source : bytes
        Raw input
    config : EngineConfig
        Engine configuration, identical for every call
    repeat : int
        Number of calls, at least 1
    renderer : Callable[[bytes, EngineConfig], bytes]
        Engine entry point

    Returns
    -------
    bytes
        Output of the final call

    """
    timer = RenderTimer()
    output = b""
    for _ in range(max(repeat, 1)):
        with timer.iteration():
            output = renderer(source, config)
    if repeat > 1:
        timer.report(logger)
    return output


def write_output(output: bytes, output_path: Optional[str] = None, stdout: Optional[IO[Any]] = None) -> None:
    """Write the rendered output.

    Parameters
    ----------
    output : bytes
        Rendered bytes
    output_path : str, optional
        File to create or overwrite; standard output when None
    stdout : IO, optional
        Stream to use instead of ``sys.stdout``

    Raises
    ------
    OutputWriteError
        If the file cannot be created or the write fails

    """
    if output_path is None:
        stream = stdout if stdout is not None else sys.stdout
        try:
            binary = _binary_stream(stream)
            if binary is not stream:
                # Text layer may hold pending writes
                stream.flush()
                binary.write(output)
                binary.flush()
            elif isinstance(stream, io.TextIOBase):
                stream.write(output.decode("utf-8"))
            else:
                stream.write(output)
                stream.flush()
        except (OSError, ValueError) as e:
            raise OutputWriteError(STDOUT_NAME, original_error=e) from e
        return

    try:
        out = open(output_path, "wb")
    except OSError as e:
        raise OutputWriteError(output_path, message=f"Error creating {output_path}: {e}", original_error=e) from e
    with out:
        try:
            out.write(output)
        except OSError as e:
            raise OutputWriteError(output_path, original_error=e) from e


def run_conversion(
    settings: Settings,
    config: EngineConfig,
    input_path: Optional[str] = None,
    output_path: Optional[str] = None,
    renderer: RenderFunc = render,
    stdin: Optional[IO[Any]] = None,
    stdout: Optional[IO[Any]] = None,
) -> bytes:
    """Read, render and write one document.

    Parameters
    ----------
    settings : Settings
        Normalized settings; ``repeat`` and ``cpu_profile`` are used here
    config : EngineConfig
        Engine configuration built from ``settings``
    input_path : str, optional
        Input file; standard input when None
    output_path : str, optional
        Output file; standard output when None
    renderer : Callable[[bytes, EngineConfig], bytes]
        Engine entry point
    stdin, stdout : IO, optional
        Streams to use instead of ``sys.stdin`` / ``sys.stdout``

    Returns
    -------
    bytes
        The output that was written

    Raises
    ------
    InputReadError
        If the input cannot be read
    OutputWriteError
        If the output cannot be created or written

    """
    with profiling_scope(settings.cpu_profile):
        source = read_input(input_path, stdin=stdin)
        logger.debug("Read %d byte(s) from %s", len(source), input_path or STDIN_NAME)

        with TimingContext(f"Rendering {settings.repeat} time(s)", logger):
            output = render_repeatedly(source, config, settings.repeat, renderer=renderer)

        write_output(output, output_path, stdout=stdout)
        logger.debug("Wrote %d byte(s) to %s", len(output), output_path or STDOUT_NAME)
    return output


__all__ = [
    "profiling_scope",
    "read_input",
    "render_repeatedly",
    "write_output",
    "run_conversion",
]
