"""Exception types raised by gamekit.

Everything derives from ``GamekitError`` so the driver can catch the
whole family at the top of ``main``.
"""

from __future__ import annotations

from typing import Dict


class GamekitError(Exception):
    pass


class AssetLoadError(GamekitError):
    """One or more assets failed during the preload barrier.

    ``failures`` maps the asset name to the error message produced while
    loading it.
    """

    def __init__(self, failures: Dict[str, str]) -> None:
        self.failures = dict(failures)
        names = ", ".join(sorted(self.failures))
        super().__init__(f"failed to load {len(self.failures)} asset(s): {names}")


class AssetNotReadyError(GamekitError):
    """An asset was requested before ``AssetManager.preload`` completed."""


class ConfigurationError(GamekitError):
    """Invalid setup: incomplete mode dispatch, bad geometry, unknown kinds."""


__all__ = ["GamekitError", "AssetLoadError", "AssetNotReadyError", "ConfigurationError"]
