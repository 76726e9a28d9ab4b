"""Exception types raised by the scanner, config loader and git client."""

from __future__ import annotations


class GgsError(Exception):
    """Base class for all ggs errors."""


class InvalidRoot(GgsError):
    """Scan root is missing, not a directory, or unreadable."""


class ConfigError(GgsError):
    """Config file could not be read or holds a bad value."""


class VcsError(GgsError):
    """A version-control command failed or produced unusable output."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        msg = super().__str__()
        if self.stderr.strip():
            return f"{msg}: {self.stderr.strip().splitlines()[-1]}"
        return msg
