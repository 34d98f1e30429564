"""Shared fixtures: a recording fake VCS backend and a mock logger."""

from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from vulkan.backup import Author, VcsBackend
from vulkan.exceptions import VcsError


class FakeBackend(VcsBackend):
    """In-memory VcsBackend recording the calls it receives."""

    def __init__(
        self,
        name: str = "fake",
        dirty: bool = True,
        fail_on: Optional[str] = None,
        push_error: Optional[VcsError] = None,
    ):
        super().__init__(Path("/nonexistent"))
        self.name = name
        self.dirty = dirty
        self.fail_on = fail_on
        self.push_error = push_error
        self.calls: List[str] = []
        self.commits: List[Dict[str, Any]] = []
        self.pushed: List[tuple] = []

    def _record(self, call: str) -> None:
        self.calls.append(call)
        if self.fail_on == call:
            raise RuntimeError(f"{self.name} {call} exploded")

    async def init(self) -> None:
        self._record("init")

    async def ensure_remote(self, name: str, url: str) -> None:
        self._record("ensure_remote")

    async def has_changes(self) -> bool:
        self._record("has_changes")
        return self.dirty

    async def commit(self, message: str, author: Optional[Author] = None) -> str:
        self._record("commit")
        self.commits.append({"message": message, "author": author})
        self.dirty = False
        return "0123456789abcdef0123"

    async def current_branch(self) -> str:
        self._record("current_branch")
        return "main"

    async def push(self, remote: str, branch: str) -> None:
        self._record("push")
        if self.push_error:
            raise self.push_error
        self.pushed.append((remote, branch))

    async def head_summary(self) -> Optional[Dict[str, Any]]:
        self._record("head_summary")
        return None


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def fake_backend():
    """Factory for FakeBackend instances."""
    return FakeBackend
