"""
Exit Codes - Process exit statuses for the CLI.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit statuses returned by ``mdissues``."""

    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    INTERRUPTED = 130
