"""Core modules for filterpipe."""
