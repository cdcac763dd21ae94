"""Line-oriented text editor built around an indexed line collection."""

__all__ = [
    "adapters",
    "commands",
    "lines",
    "runtime",
    "session",
    "store",
]

__version__ = "0.1.0"
