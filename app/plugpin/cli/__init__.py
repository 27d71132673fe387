"""Command-line interface for plugpin."""
