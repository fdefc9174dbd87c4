"""Best-effort reporting of the current process's memory use."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemoryStats:
    """Resident and virtual memory in megabytes, with share of system memory."""

    rss_mb: float
    vm_size_mb: float
    percent: float | None = None


def _field_number(text: str, prefix: str, separator: str | None = None) -> float | None:
    for line in text.splitlines():
        if not line.startswith(prefix):
            continue
        try:
            if separator is None:
                return float(line.split()[1])
            return float(line.split(separator, 2)[1].strip())
        except (IndexError, ValueError):
            return None
    return None


def _read_text(path: str | Path) -> str | None:
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def _linux_memory_usage(
    status_path: str | Path, meminfo_path: str | Path = "/proc/meminfo"
) -> MemoryStats | None:
    status = _read_text(status_path)
    if status is None:
        return None
    rss_kb = _field_number(status, "VmRSS:")
    vm_kb = _field_number(status, "VmSize:")
    if rss_kb is None or vm_kb is None:
        return None
    percent = None
    meminfo = _read_text(meminfo_path)
    if meminfo is not None:
        total_kb = _field_number(meminfo, "MemTotal:")
        if total_kb is not None and total_kb > 0:
            percent = rss_kb / total_kb * 100.0
    return MemoryStats(rss_kb / 1024.0, vm_kb / 1024.0, percent)


def _run(args: Sequence[str]) -> str | None:
    try:
        result = subprocess.run(args, capture_output=True, check=False)
    except OSError:
        return None
    return result.stdout.decode("utf-8", errors="replace")


def _parse_float(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        return float(text.strip())
    except ValueError:
        return None


def _macos_memory_usage() -> MemoryStats | None:
    pid = str(os.getpid())
    rss_kb = _parse_float(_run(["ps", "-o", "rss=", "-p", pid]))
    if rss_kb is None:
        return None
    vsz_kb = _parse_float(_run(["ps", "-o", "vsz=", "-p", pid]))
    if vsz_kb is None:
        return None
    percent = None
    total_bytes = _parse_float(_run(["sysctl", "-n", "hw.memsize"]))
    if total_bytes is not None and total_bytes / 1024.0 > 0:
        percent = rss_kb / (total_bytes / 1024.0) * 100.0
    return MemoryStats(rss_kb / 1024.0, vsz_kb / 1024.0, percent)


def _windows_memory_usage() -> MemoryStats | None:
    output = _run(
        [
            "wmic",
            "process",
            "where",
            f"ProcessId={os.getpid()}",
            "get",
            "WorkingSetSize,",
            "PageFileUsage",
            "/value",
        ]
    )
    if output is None:
        return None
    rss_bytes = _field_number(output, "WorkingSetSize=", "=")
    vm_kb = _field_number(output, "PageFileUsage=", "=")
    if rss_bytes is None or vm_kb is None:
        return None
    percent = None
    mem_output = _run(["wmic", "ComputerSystem", "get", "TotalPhysicalMemory", "/value"])
    if mem_output is not None:
        total_bytes = _field_number(mem_output, "TotalPhysicalMemory=", "=")
        if total_bytes is not None and total_bytes > 0:
            percent = rss_bytes / total_bytes * 100.0
    return MemoryStats(rss_bytes / (1024.0 * 1024.0), vm_kb / 1024.0, percent)


def get_memory_usage() -> MemoryStats | None:
    """Return this process's memory use, or None where it cannot be determined."""
    platform = sys.platform
    if platform.startswith("linux"):
        return _linux_memory_usage(f"/proc/{os.getpid()}/status")
    if platform == "darwin":
        return _macos_memory_usage()
    if platform.startswith("win"):
        return _windows_memory_usage()
    return None


def log_memory_usage(note: str) -> None:
    """Log the current memory use, tagged with a note."""
    stats = get_memory_usage()
    if stats is None:
        log.info(
            "Memory usage tracking not available or failed on this platform (%s)",
            sys.platform,
        )
        return
    percent = "N/A" if stats.percent is None else f"{stats.percent:.1f}%"
    log.info(
        "Memory usage (%s): %.1f MB physical (RSS), %.1f MB virtual/commit, %s of system memory",
        note,
        stats.rss_mb,
        stats.vm_size_mb,
        percent,
    )