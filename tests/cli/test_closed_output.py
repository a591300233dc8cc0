"""Tests for running filterpipe with a reader that stops early."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

import filterpipe
from filterpipe.shared.constants import CLIDefaults

SRC_DIR = Path(filterpipe.__file__).resolve().parents[1]


@pytest.mark.skipif(shutil.which("head") is None, reason="needs the head utility")
class TestClosedOutput:
    """Test cases for `filterpipe ... | head -1`."""

    def test_head_reports_a_single_line(self) -> None:
        """Closing stdout early is reported once, without a traceback."""
        # Given
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(SRC_DIR), env.get("PYTHONPATH")) if p
        )
        paths = [f"f{i}" for i in range(20000)]

        # When
        producer = subprocess.Popen(
            [sys.executable, "-m", "filterpipe", *paths],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
        )
        reader = subprocess.Popen(
            ["head", "-1"],
            stdin=producer.stdout,
            stdout=subprocess.PIPE,
        )
        producer.stdout.close()
        head_out, _ = reader.communicate(timeout=60)
        stderr = producer.stderr.read().decode()
        producer.stderr.close()
        returncode = producer.wait(timeout=60)

        # Then
        assert head_out.decode() == "f0\n"
        assert returncode == CLIDefaults.EXIT_ERROR
        assert "Traceback" not in stderr
        lines = stderr.splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("Error: Output closed by reader")
