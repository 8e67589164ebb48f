"""Version information for smartapp-core."""

__version__ = "0.1.0"
