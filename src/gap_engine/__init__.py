"""Gap-buffer text storage engine for editor backends."""

__all__ = [
    "buffer",
    "config",
    "files",
    "runtime",
]

__version__ = "0.1.0"
