"""What To Watch: REST backend for a film catalog."""

__version__ = "0.1.0"
__author__ = "What To Watch Team"

__all__ = ["__version__", "__author__"]
