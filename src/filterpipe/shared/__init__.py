"""Shared utilities: constants, errors and logging helpers."""
