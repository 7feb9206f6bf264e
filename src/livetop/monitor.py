"""System metrics provider for livetop."""

import logging

import psutil

from livetop.errors import MetricsError
from livetop.models import ProcessSample, SystemSnapshot

logger = logging.getLogger(__name__)

# Attributes to prefetch for every process
PROCESS_ATTRS = ["pid", "name", "cpu_percent", "memory_info"]


class MetricsProvider:
    """
    Metrics provider that reads CPU, memory and process data using psutil.

    Readings are taken by `refresh_all()` and kept until the next refresh;
    the accessors only return what the last refresh saw. All memory values
    are in KiB. Process CPU usage follows psutil: 100.0 means one full core.
    """

    def __init__(self) -> None:
        """
        Initialize the provider and take a first reading.

        Raises:
            MetricsError: psutil cannot read the host's metrics.
        """
        self._cpu_percent = 0.0
        self._used_memory = 0
        self._total_memory = 0
        self._processes: list[ProcessSample] = []
        try:
            # Initialize CPU percent (first call returns 0.0)
            psutil.cpu_percent(interval=None)
            self.refresh_all()
        except (psutil.Error, OSError) as error:
            raise MetricsError(f"cannot read system metrics: {error}") from error

    def refresh_all(self) -> None:
        """Re-read global CPU, memory and the process list."""
        # Non-blocking, measured since the previous call
        self._cpu_percent = psutil.cpu_percent(interval=None)

        mem = psutil.virtual_memory()
        self._used_memory = mem.used // 1024
        self._total_memory = mem.total // 1024

        self._processes = self._collect_processes()
        logger.debug("Refreshed metrics: %d processes", len(self._processes))

    def global_cpu_usage(self) -> float:
        return self._cpu_percent

    def used_memory(self) -> int:
        return self._used_memory

    def total_memory(self) -> int:
        return self._total_memory

    def processes(self) -> list[ProcessSample]:
        return list(self._processes)

    def snapshot(self) -> SystemSnapshot:
        """Package the last readings as a SystemSnapshot."""
        return SystemSnapshot(
            global_cpu_percent=self.global_cpu_usage(),
            used_memory_kb=self.used_memory(),
            total_memory_kb=self.total_memory(),
            processes=self.processes(),
        )

    def _collect_processes(self) -> list[ProcessSample]:
        """
        Collect samples of all running processes.

        psutil caches Process objects between process_iter() calls, which is
        what makes the per-process cpu_percent meaningful after the first
        refresh. Processes that exit mid-iteration, deny access or are
        zombies are skipped.
        """
        processes: list[ProcessSample] = []

        for proc in psutil.process_iter(attrs=PROCESS_ATTRS):
            try:
                info = proc.info

                # Get memory RSS, defaulting to 0 if unavailable
                mem_info = info.get("memory_info")
                memory_kb = mem_info.rss // 1024 if mem_info else 0

                processes.append(
                    ProcessSample(
                        pid=info.get("pid", proc.pid),
                        name=info.get("name") or "",
                        cpu_percent=info.get("cpu_percent") or 0.0,
                        memory_kb=memory_kb,
                    )
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue

        return processes
