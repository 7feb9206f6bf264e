"""Snapshot transformer: turns a SystemSnapshot into display-ready text.

Rows are sorted on the numeric memory value and formatted afterwards. A
value that is not a usable number (None, NaN, a stray string) is shown as
zero and sorted after every valid row; nothing in here raises on a bad field.
"""

import math

from livetop.config import KB_PER_MB
from livetop.models import DashboardModel, DisplayRow, ProcessSample, SystemSnapshot


def _number(value: object) -> float | None:
    """Return value as a finite float, or None if it is not one."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def format_cpu(percent: object) -> str:
    """Format a CPU percentage, e.g. "12.50%"."""
    return f"{_number(percent) or 0.0:.2f}%"


def format_memory(kilobytes: object) -> str:
    """Format a KiB value as megabytes, e.g. "8192.00 MB"."""
    return f"{(_number(kilobytes) or 0.0) / KB_PER_MB:.2f} MB"


def format_name(name: object) -> str:
    """
    Make a process name safe to display.

    Bytes and surrogate-escaped strings (what Python produces for names that
    are not valid UTF-8) are decoded lossily, with U+FFFD for the bad bytes.
    """
    if name is None:
        return ""
    if isinstance(name, bytes):
        return name.decode("utf-8", errors="replace")
    text = str(name)
    try:
        raw = text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", errors="replace")
    return raw.decode("utf-8", errors="replace")


def cpu_summary(snapshot: SystemSnapshot) -> str:
    return f"CPU Usage: {format_cpu(snapshot.global_cpu_percent)}"


def memory_summary(snapshot: SystemSnapshot) -> str:
    used = (_number(snapshot.used_memory_kb) or 0.0) / KB_PER_MB
    total = (_number(snapshot.total_memory_kb) or 0.0) / KB_PER_MB
    return f"Memory Usage: {used:.2f} / {total:.2f} MB"


def _memory_sort_key(process: ProcessSample) -> tuple[bool, float]:
    memory = _number(process.memory_kb)
    if memory is None:
        return (False, 0.0)
    return (True, memory)


def sort_by_memory(processes: list[ProcessSample]) -> list[ProcessSample]:
    """Sort processes by memory, largest first; ties keep their input order."""
    return sorted(processes, key=_memory_sort_key, reverse=True)


def to_display_row(process: ProcessSample) -> DisplayRow:
    return DisplayRow(
        pid_text=str(process.pid),
        name_text=format_name(process.name),
        cpu_text=format_cpu(process.cpu_percent),
        memory_text=format_memory(process.memory_kb),
    )


def build_model(snapshot: SystemSnapshot) -> DashboardModel:
    """Transform a snapshot into the model for one frame."""
    rows = tuple(to_display_row(proc) for proc in sort_by_memory(snapshot.processes))
    return DashboardModel(
        cpu_line=cpu_summary(snapshot),
        memory_line=memory_summary(snapshot),
        rows=rows,
    )
