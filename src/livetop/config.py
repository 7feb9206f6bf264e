"""Fixed settings for livetop.

None of these are user-configurable; they are collected here so the loop,
the transformer and the widgets agree on them.
"""

import logging

# Seconds between successive refresh/render cycles
REFRESH_INTERVAL = 1.0

# Upper bound on the per-cycle wait for input, in seconds
POLL_TIMEOUT = 0.1

# The metrics provider reports memory in KiB
KB_PER_MB = 1024

SYSTEM_INFO_TITLE = "System Info"
PROCESSES_TITLE = "Processes"

# Process table columns: (label, key, width)
COLUMNS: list[tuple[str, str, int]] = [
    ("PID", "pid", 10),
    ("Name", "name", 30),
    ("CPU", "cpu", 10),
    ("Memory", "memory", 10),
]

LOG_LEVEL = logging.INFO
