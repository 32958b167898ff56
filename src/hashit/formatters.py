"""Rendering of ResultSets as table, JSON or plain text, and file output."""

from __future__ import annotations

import json
import math
import os
import stat
import tempfile
import textwrap
from pathlib import Path
from typing import List, Mapping, Sequence, Union

from colorama import Fore, Style

from .errors import OutputError
from .orchestrator import FAILURE_PREFIX, FailureMarker

TABLE_TITLE = "Hash Generation Results"
TABLE_HEADERS = ("Algorithm", "Hash Value")
# outer widths, one space of padding on each side included
TABLE_COL_WIDTHS = (15, 70)
PLAIN_NAME_WIDTH = 12


def _is_failure(value) -> bool:
    if isinstance(value, FailureMarker):
        return True
    return str(value).startswith(FAILURE_PREFIX)


def _paint(text: str, color: str, enabled: bool) -> str:
    if not enabled:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def format_as_json(results: Mapping) -> str:
    return json.dumps({k: str(v) for k, v in results.items()}, indent=2)


def format_as_plain(results: Mapping, color: bool = True) -> str:
    lines = []
    for algorithm, value in results.items():
        name = algorithm.ljust(PLAIN_NAME_WIDTH)
        text = str(value)
        if color:
            name = _paint(name, Fore.CYAN, True)
            text = _paint(text, Fore.RED if _is_failure(value) else Fore.WHITE, True)
        lines.append(f"{name} {text}")
    return "\n".join(lines)


def _wrap(text: str, width: int) -> List[str]:
    # digests have no spaces, so break long words rather than overflow
    return textwrap.wrap(text, width=width, break_long_words=True) or [""]


def _border(left: str, mid: str, right: str, color: bool) -> str:
    segments = ["─" * w for w in TABLE_COL_WIDTHS]
    line = left + mid.join(segments) + right
    return _paint(line, Style.DIM, color)


def _row(cells: Sequence[str], paints: Sequence[str], color: bool) -> List[str]:
    inner = [w - 2 for w in TABLE_COL_WIDTHS]
    wrapped = [_wrap(c, w) for c, w in zip(cells, inner)]
    height = max(len(w) for w in wrapped)
    bar = _paint("│", Style.DIM, color)
    out = []
    for i in range(height):
        parts = []
        for col, lines in enumerate(wrapped):
            text = lines[i] if i < len(lines) else ""
            text = text.ljust(inner[col])
            if paints[col]:
                text = _paint(text, paints[col], color)
            parts.append(f" {text} ")
        out.append(bar + bar.join(parts) + bar)
    return out


def format_as_table(results: Mapping, color: bool = True, quiet: bool = False) -> str:
    lines = []
    if not quiet:
        title = _paint(TABLE_TITLE, Style.BRIGHT + Fore.BLUE, color)
        lines.extend(["", title])

    lines.append(_border("┌", "┬", "┐", color))
    lines.extend(_row(TABLE_HEADERS, (Fore.CYAN, Fore.CYAN), color))
    for algorithm, value in results.items():
        lines.append(_border("├", "┼", "┤", color))
        paint = Fore.RED if _is_failure(value) else ""
        lines.extend(_row((algorithm, str(value)), ("", paint), color))
    lines.append(_border("└", "┴", "┘", color))
    return "\n".join(lines)


def format_output(
    results: Mapping, fmt: str = "table", color: bool = True, quiet: bool = False
) -> str:
    """Render `results` in one of the supported formats.

    Unknown formats fall back to the table layout; the CLI validates the
    format before it gets here.
    """
    if fmt == "json":
        return format_as_json(results)
    if fmt == "plain":
        return format_as_plain(results, color=color)
    return format_as_table(results, color=color, quiet=quiet)


def _new_file_mode(path: Path) -> int:
    # keep the mode of a file being replaced, else what open() would give
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_output(content: str, path: Union[str, Path]) -> Path:
    """Write `content` to `path` atomically, creating parent directories.

    The file gets the permissions a plain open() would give it rather than
    the owner-only mode of the temporary file.
    """
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        # temp file in the same directory so os.replace stays on one device
        fd, tmp = tempfile.mkstemp(dir=str(p.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                if not content.endswith("\n"):
                    f.write("\n")
            os.chmod(tmp, _new_file_mode(p))
            os.replace(tmp, str(p))
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
    except OSError as e:
        raise OutputError(f"Failed to write to file {p}: {e}") from e
    return p


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    if num_bytes == 0:
        return "0 Bytes"
    k = 1024
    dm = max(0, decimals)
    sizes = ["Bytes", "KB", "MB", "GB"]
    i = min(int(math.floor(math.log(num_bytes) / math.log(k))), len(sizes) - 1)
    value = round(num_bytes / (k ** i), dm)
    # drop trailing zeros the way a float repr would ("1.5 KB", "2 KB")
    text = f"{value:.{dm}f}".rstrip("0").rstrip(".") if dm else str(int(value))
    return f"{text} {sizes[i]}"
