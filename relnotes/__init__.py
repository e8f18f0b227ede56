"""Release notes generator for multi-package git repositories."""

__version__ = "0.1.0"
