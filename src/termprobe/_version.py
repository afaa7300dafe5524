"""Version information for termprobe."""

__version__ = "0.1.0"
