"""Version-control backends for the backup working tree.

The sync stage is written against VcsBackend only. Two implementations are
wired at startup: GitPythonBackend (primary) and SubprocessGitBackend, which
drives the git CLI directly and serves as the fallback when the library
path fails in a given environment.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import git

from vulkan.exceptions import VcsError
from vulkan.logger import Logger


@dataclass(frozen=True)
class Author:
    """Commit identity."""

    name: str
    email: str


class VcsBackend(ABC):
    """Capability interface over one repository working tree."""

    name = "vcs"

    def __init__(self, path: Path, env: Optional[Mapping[str, str]] = None):
        self.path = Path(path)
        self.env: Dict[str, str] = dict(env or {})

    @abstractmethod
    async def init(self) -> None:
        """Create the repository; an existing one is left as is."""

    @abstractmethod
    async def ensure_remote(self, name: str, url: str) -> None:
        """Add the remote, or point an existing one at url."""

    @abstractmethod
    async def has_changes(self) -> bool:
        """Whether the working tree differs from the last commit (untracked files included)."""

    @abstractmethod
    async def commit(self, message: str, author: Optional[Author] = None) -> str:
        """Stage everything and commit. Returns the new commit sha."""

    @abstractmethod
    async def current_branch(self) -> str:
        """Name of the checked-out local branch."""

    @abstractmethod
    async def push(self, remote: str, branch: str) -> None:
        """Push branch to the same-named branch on remote.

        Raises:
            VcsError: with code PUSH_FAILED when the remote rejects or is unreachable
        """

    @abstractmethod
    async def head_summary(self) -> Optional[Dict[str, Any]]:
        """sha, date and subject of HEAD, or None before the first commit."""


class GitPythonBackend(VcsBackend):
    """Backend on top of GitPython; blocking calls run in a worker thread."""

    name = "gitpython"

    def __init__(self, path: Path, env: Optional[Mapping[str, str]] = None):
        super().__init__(path, env)
        self._repo: Optional[git.Repo] = None

    @property
    def repo(self) -> git.Repo:
        if self._repo is None:
            try:
                self._repo = git.Repo(self.path)
            except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
                raise VcsError(
                    f"No git repository at {self.path}",
                    code="REPO_NOT_INITIALIZED",
                ) from e
            self._repo.git.update_environment(**self.env)
        return self._repo

    def _init(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        self._repo = git.Repo.init(self.path)
        self._repo.git.update_environment(**self.env)

    def _ensure_remote(self, name: str, url: str) -> None:
        repo = self.repo
        if name in [remote.name for remote in repo.remotes]:
            remote = repo.remote(name)
            if remote.url != url:
                remote.set_url(url)
        else:
            repo.create_remote(name, url)

    def _commit(self, message: str, author: Optional[Author]) -> str:
        repo = self.repo
        repo.git.add(A=True)
        actor = git.Actor(author.name, author.email) if author else None
        commit = repo.index.commit(message, author=actor, committer=actor)
        return commit.hexsha

    def _current_branch(self) -> str:
        try:
            return self.repo.active_branch.name
        except TypeError as e:
            # GitPython raises TypeError for a detached HEAD
            raise VcsError("HEAD is detached, no branch to push", code="DETACHED_HEAD") from e

    def _push(self, remote: str, branch: str) -> None:
        refspec = f"refs/heads/{branch}:refs/heads/{branch}"
        try:
            infos = self.repo.remote(remote).push(refspec=refspec)
        except git.GitCommandError as e:
            raise VcsError(
                f"Push to {remote}/{branch} failed: {e.stderr.strip() if e.stderr else e}",
                code="PUSH_FAILED",
            ) from e

        if not infos:
            raise VcsError(f"Push to {remote}/{branch} returned no result", code="PUSH_FAILED")
        for info in infos:
            if info.flags & (git.PushInfo.ERROR | git.PushInfo.REJECTED | git.PushInfo.REMOTE_REJECTED):
                raise VcsError(
                    f"Push to {remote}/{branch} rejected: {info.summary.strip()}",
                    code="PUSH_FAILED",
                )

    def _head_summary(self) -> Optional[Dict[str, Any]]:
        repo = self.repo
        if not repo.head.is_valid():
            return None
        commit = repo.head.commit
        return {
            "sha": commit.hexsha,
            "date": commit.committed_datetime.isoformat(),
            "message": str(commit.summary),
        }

    async def init(self) -> None:
        await asyncio.to_thread(self._init)

    async def ensure_remote(self, name: str, url: str) -> None:
        await asyncio.to_thread(self._ensure_remote, name, url)

    async def has_changes(self) -> bool:
        return await asyncio.to_thread(self.repo.is_dirty, untracked_files=True)

    async def commit(self, message: str, author: Optional[Author] = None) -> str:
        return await asyncio.to_thread(self._commit, message, author)

    async def current_branch(self) -> str:
        return await asyncio.to_thread(self._current_branch)

    async def push(self, remote: str, branch: str) -> None:
        await asyncio.to_thread(self._push, remote, branch)

    async def head_summary(self) -> Optional[Dict[str, Any]]:
        return await asyncio.to_thread(self._head_summary)


class SubprocessGitBackend(VcsBackend):
    """Backend driving the git CLI with asyncio subprocesses."""

    name = "git-cli"

    def __init__(
        self,
        path: Path,
        env: Optional[Mapping[str, str]] = None,
        logger: Optional[Logger] = None,
        executable: str = "git",
    ):
        super().__init__(path, env)
        self.logger = logger
        self.executable = executable

    async def _run(self, args: List[str], check: bool = True, code: str = "GIT_COMMAND_FAILED") -> str:
        subcommand = next((a for a in args if not a.startswith("-") and "=" not in a), args[0])
        if self.logger:
            # Only the subcommand: arguments may carry remote URLs with tokens
            self.logger.debug(f"$ git {subcommand}", cwd=str(self.path))

        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                cwd=self.path,
                env={**os.environ, **self.env},
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise VcsError(f"git executable not found: {self.executable}", code="GIT_MISSING") from e

        stdout, stderr = await proc.communicate()
        if check and proc.returncode != 0:
            raise VcsError(
                f"git {subcommand} failed ({proc.returncode}): {stderr.decode(errors='replace').strip()}",
                code=code,
                details={"returncode": proc.returncode},
            )
        return stdout.decode(errors="replace").strip()

    async def init(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        await self._run(["init"])

    async def ensure_remote(self, name: str, url: str) -> None:
        current = await self._run(["remote", "get-url", name], check=False)
        if not current:
            await self._run(["remote", "add", name, url])
        elif current != url:
            await self._run(["remote", "set-url", name, url])

    async def has_changes(self) -> bool:
        return bool(await self._run(["status", "--porcelain"]))

    async def commit(self, message: str, author: Optional[Author] = None) -> str:
        await self._run(["add", "-A"])
        identity: List[str] = []
        if author:
            identity = ["-c", f"user.name={author.name}", "-c", f"user.email={author.email}"]
        # "-c" options belong before the subcommand
        await self._run(identity + ["commit", "-m", message])
        return await self._run(["rev-parse", "HEAD"])

    async def current_branch(self) -> str:
        try:
            return await self._run(["symbolic-ref", "--short", "HEAD"])
        except VcsError as e:
            raise VcsError("HEAD is detached, no branch to push", code="DETACHED_HEAD") from e

    async def push(self, remote: str, branch: str) -> None:
        await self._run(
            ["push", remote, f"refs/heads/{branch}:refs/heads/{branch}"],
            code="PUSH_FAILED",
        )

    async def head_summary(self) -> Optional[Dict[str, Any]]:
        out = await self._run(["log", "-1", "--format=%H%x00%cI%x00%s"], check=False)
        if not out:
            return None
        sha, date, subject = (out.split("\x00") + ["", ""])[:3]
        return {"sha": sha, "date": date, "message": subject}
