"""Core paths and settings for plugpin."""
