"""Shared CLI helpers: context and error handling."""
