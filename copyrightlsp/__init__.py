"""A language server that checks documents for template-based headers."""

__version__ = "0.1.0"
__all__ = ["__version__"]