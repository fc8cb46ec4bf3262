"""Thread-safe archive queue of blocks and headers, shared thread state, and string helpers."""

__version__ = "0.1.0"
__all__ = ["qtypes", "queue", "strdico", "strlist", "syncthread"]