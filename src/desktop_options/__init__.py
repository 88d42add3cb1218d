"""Runtime configuration resolver for the desktop shell: settings, paths, fonts, endpoints."""

__version__ = "0.1.0"
