"""Florida mortgage quote and down payment assistance engine.

This module also exposes the package version for runtime display."""

from homequote.version import __version__

__all__ = ["__version__"]
