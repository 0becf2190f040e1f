# palette_grid/utils.py
from __future__ import annotations

"""
Shared utilities for palette_grid.

Includes duration formatting, colour usage reporting and tidy logging.
"""

import io
import sys
import threading
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Sequence, TextIO, Tuple

from .core_types import UsedColor


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Colour usage


def colour_usage_report(
    used_colours: Sequence[UsedColor],
) -> List[Tuple[str, str, str, int]]:
    """
    Flatten used colours into (hex, name, tier, count) rows.

    Order is kept as given; callers pass the already-sorted table.
    """
    return [(u.hex, u.name, u.tier, u.count) for u in used_colours]


# Pretty logging


def format_percentage(x: float, decimals: int = 1) -> str:
    """Format a 0..1 fraction as a percentage."""
    return f"{x * 100.0:.{decimals}f}%"


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Bools print as on/off, ints with thousands separators, floats with at
    most three decimals.
    """
    out: List[str] = []
    for name, value in pairs:
        if isinstance(value, bool):
            display = "on" if value else "off"
        elif isinstance(value, int):
            display = f"{value:,}"
        elif isinstance(value, float):
            display = f"{value:.3f}".rstrip("0").rstrip(".")
        else:
            display = str(value)
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [grid] Size: 128  Tier filter: all  Limit: -
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


# Output sink. Worker threads capture into their own buffer; everyone else
# writes to whatever sys.stdout is at call time.
_sink = threading.local()


def _out() -> TextIO:
    stream = getattr(_sink, "stream", None)
    return stream if stream is not None else sys.stdout


@contextmanager
def capture_output() -> Iterator[io.StringIO]:
    """
    Collect this thread's log/debug_log/warn/print_banner output in a buffer.

    Other threads and the process-wide sys.stdout are untouched, so it is
    safe to use from a thread pool. error() still goes to stderr.
    """
    previous = getattr(_sink, "stream", None)
    buf = io.StringIO()
    _sink.stream = buf
    try:
        yield buf
    finally:
        _sink.stream = previous


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", file=_out(), flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, file=_out(), flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=_out(), flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=_out(), flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Keeps per-file output readable in terminals that expose .reconfigure().
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


__all__ = [
    "format_seconds_compact",
    "format_total_duration_compact",
    "colour_usage_report",
    "format_percentage",
    "key_value_pairs_to_string",
    "print_config_line",
    "capture_output",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
    "enable_line_buffered_stdout",
]
