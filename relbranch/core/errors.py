"""Exit codes for the relbranch CLI.

Every asserted release failure (wrong branch, dirty tree, invalid version,
missing repository, hook failure, existing tag) exits with
``RELEASE_ERROR``. ``USAGE_ERROR`` matches what typer/click use for bad
command lines.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. These values are part of the CLI contract."""

    OK = 0
    RELEASE_ERROR = 1
    USAGE_ERROR = 2
