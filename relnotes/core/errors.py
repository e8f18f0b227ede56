"""Exit codes for the relnotes command line.

The numeric values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad arguments, unknown package)
- 2: Configuration error (invalid relnotes.toml, missing token)
- 3: Git error (corrupt or shallow clone, unreadable history)
- 4: Network error (GitHub API unreachable)
- 5: I/O error (output directory not writable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    GIT_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
