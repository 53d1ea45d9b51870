"""Shared pytest fixtures for devlog tests."""

from __future__ import annotations

import io
import os

import pytest

import devlog
from devlog import CallerInfo, DevlogConfig, DevLogger, FixedLocator

FIXED = CallerInfo("app/models.py", 42, "User.save")


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> object:
    """Reset the process-wide logger and DEVLOG_ env vars around each test."""
    for key in [k for k in os.environ if k.startswith("DEVLOG_")]:
        monkeypatch.delenv(key)
    devlog.reset()
    yield
    devlog.reset()


@pytest.fixture
def buf() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(buf: io.StringIO) -> DevLogger:
    """Logger writing plain lines with a constant timestamp and call site."""
    return DevLogger(DevlogConfig(output=buf, colors=False, time_format="TS"), FixedLocator(FIXED))
