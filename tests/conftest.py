"""Shared fixtures for the pageclone test suite."""

from pathlib import Path

import pytest
from PIL import Image


class ScriptedProvider:
    """Completion provider that replays canned replies and records requests."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.requests = []

    async def complete(self, request):
        self.requests.append(request)
        reply = self.replies[len(self.requests) - 1]
        if isinstance(reply, BaseException):
            raise reply
        return reply


def write_png(path: Path, size=(64, 48)) -> Path:
    Image.new("RGB", size, "white").save(path, format="PNG")
    return path


@pytest.fixture
def scripted_provider():
    return ScriptedProvider


@pytest.fixture
def snapshot_png(tmp_path):
    return write_png(tmp_path / "screenshot.png")
