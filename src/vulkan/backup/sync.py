"""Sync stage: commit the backup working tree and push it to the remote."""

from datetime import datetime, timezone
from typing import Optional

from vulkan.backup.config import BackupConfig
from vulkan.backup.models import BackupOutcome, BackupRun
from vulkan.backup.vcs import Author, VcsBackend
from vulkan.exceptions import VcsError
from vulkan.logger import Logger


def build_commit_message(trigger: str, when: Optional[datetime] = None) -> str:
    """'Backup from <trigger> - <ISO-8601 UTC timestamp>'"""
    when = when or datetime.now(timezone.utc)
    timestamp = when.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"Backup from {trigger} - {timestamp}"


async def commit_changes(
    backend: VcsBackend,
    trigger: str,
    config: BackupConfig,
    logger: Logger,
) -> Optional[str]:
    """Commit the working tree; returns the commit message, or None if clean."""
    if not await backend.has_changes():
        logger.info("No changes to backup", trigger=trigger, backend=backend.name)
        return None

    message = build_commit_message(trigger)
    author = None
    if config.author_name and config.author_email:
        author = Author(config.author_name, config.author_email)
    sha = await backend.commit(message, author)
    logger.info("Backup committed", trigger=trigger, commit=sha[:12], backend=backend.name)
    return message


async def push_commit(
    backend: VcsBackend,
    trigger: str,
    message: str,
    config: BackupConfig,
    logger: Logger,
) -> BackupRun:
    """Push the committed backup to the configured remote, if any.

    A failed push still counts as a successful backup: the commit is safe
    locally and the next run pushes it along with whatever comes next.
    Any other error propagates to the caller.
    """
    if not config.has_remote:
        logger.info(f"Local backup completed: {message}")
        return BackupRun(
            trigger=trigger,
            outcome=BackupOutcome.SUCCESS,
            message=message,
            backend=backend.name,
        )

    branch = await backend.current_branch()
    try:
        await backend.push(config.remote_name, branch)
    except VcsError as e:
        logger.error(
            "Failed to push backup to remote",
            trigger=trigger,
            remote=config.remote_name,
            branch=branch,
            error=e.message,
        )
        return BackupRun(
            trigger=trigger,
            outcome=BackupOutcome.SUCCESS_WITH_PUSH_FAILURE,
            message=f"{message} (push failed)",
            push_error=e.message,
            backend=backend.name,
        )

    logger.info(f"Backup pushed to remote: {message}", remote=config.remote_name, branch=branch)
    return BackupRun(
        trigger=trigger,
        outcome=BackupOutcome.SUCCESS,
        message=message,
        backend=backend.name,
    )


def _no_changes(trigger: str, backend: VcsBackend) -> BackupRun:
    return BackupRun(
        trigger=trigger,
        outcome=BackupOutcome.NO_CHANGES,
        message="No changes to backup",
        backend=backend.name,
    )


async def commit_and_push(
    backend: VcsBackend,
    trigger: str,
    config: BackupConfig,
    logger: Logger,
) -> BackupRun:
    """Run the commit/push sequence on one backend."""
    message = await commit_changes(backend, trigger, config, logger)
    if message is None:
        return _no_changes(trigger, backend)
    return await push_commit(backend, trigger, message, config, logger)


async def sync_to_remote(
    primary: VcsBackend,
    fallback: Optional[VcsBackend],
    trigger: str,
    config: BackupConfig,
    logger: Logger,
) -> BackupRun:
    """Commit and push with the primary backend, retrying once on the fallback.

    The fallback reruns the whole sequence with direct git commands, unless
    the primary already committed: then it only pushes that commit. If the
    fallback fails too, its error propagates.
    """
    message: Optional[str] = None
    try:
        message = await commit_changes(primary, trigger, config, logger)
        if message is None:
            return _no_changes(trigger, primary)
        return await push_commit(primary, trigger, message, config, logger)
    except Exception as e:
        if fallback is None:
            raise
        logger.warning(
            "Primary git backend failed, falling back to git commands",
            backend=primary.name,
            fallback=fallback.name,
            committed=message is not None,
            error=str(e),
        )

    if message is not None:
        return await push_commit(fallback, trigger, message, config, logger)
    return await commit_and_push(fallback, trigger, config, logger)
