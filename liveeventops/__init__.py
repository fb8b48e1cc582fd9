"""LiveEventOps - VM diagnostics, health scoring and remediation for the live-event environment."""

from liveeventops.__version__ import __version__

__all__ = ["__version__"]
