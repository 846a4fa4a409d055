from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SettingsStore(Protocol):
    """Raw persistence for the primary settings document.

    The config core depends only on this interface; it never opens the
    settings file itself.
    """

    def read(self) -> dict:
        """Return the decoded document.

        Raises FileNotFoundError when no document exists, SettingsParseError
        when it exists but cannot be decoded, OSError on other read failures.
        """
        ...

    def write(self, data: dict) -> None:
        """Replace the stored document. Raises OSError on failure."""
        ...
