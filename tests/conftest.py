"""
Pytest configuration og shared fixtures.
"""

import asyncio
import logging
import os
import shutil
import tempfile
import time

import pytest


class RecordingForager:
    """Async Forager that records every path it is handed."""

    def __init__(self):
        self.calls = []
        self.called = asyncio.Event()

    async def __call__(self, context, file_path):
        self.calls.append(file_path)
        self.called.set()


@pytest.fixture
def scan_dir():
    """Temporary directory to scan."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def make_file():
    """Write a file and optionally backdate its modification time."""

    def _make_file(directory, name, content=b"test content", age_seconds=0.0):
        file_path = os.path.join(directory, name)
        with open(file_path, "wb") as f:
            f.write(content)
        if age_seconds:
            past = time.time() - age_seconds
            os.utime(file_path, (past, past))
        return file_path

    return _make_file


@pytest.fixture
def recording_forager():
    return RecordingForager()


@pytest.fixture
def restore_root_logging():
    """Put the root logger back the way it was after setup_logging() ran."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
