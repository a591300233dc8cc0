"""
Pytest configuration and shared fixtures for filterpipe tests.

This module provides fixtures for creating files of known sizes and for
feeding and draining pipeline queues.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable, Generator, Iterable
from pathlib import Path

import pytest

from filterpipe.core.pipeline.utils import BoundedQueue
from filterpipe.shared.constants import Pipeline
from filterpipe.shared.logging import ROOT_LOGGER_NAME


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def make_file(temp_dir: Path) -> Callable[[str, int], str]:
    """Return a factory creating a file of an exact size.

    The factory returns the file path as a string, the form paths take
    inside the pipeline.
    """

    def _make(name: str, size: int) -> str:
        file_path = temp_dir / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(b"x" * size)
        return str(file_path)

    return _make


@pytest.fixture
def feed_queue() -> Callable[[Iterable[str]], BoundedQueue]:
    """Return a factory for an unbounded queue pre-filled and closed."""

    def _feed(items: Iterable[str]) -> BoundedQueue:
        input_queue = BoundedQueue(maxsize=0, name="test_input")
        for item in items:
            input_queue.put(item)
        input_queue.close()
        return input_queue

    return _feed


@pytest.fixture
def drain() -> Callable[[BoundedQueue], list[str]]:
    """Return a function collecting queue items up to end-of-stream."""

    def _drain(output_queue: BoundedQueue, timeout: float = 5.0) -> list[str]:
        items = []
        while True:
            item = output_queue.get(timeout=timeout)
            if item is Pipeline.SENTINEL:
                return items
            items.append(item)

    return _drain


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Remove handlers installed by the CLI or logging tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
