"""plugpin - keep a host application's plugin entry installed and pinned."""

__version__ = "0.1.0"
