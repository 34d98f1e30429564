"""Backup orchestrator.

One BackupManager is built at startup and handed to every request handler
through the application context. It owns the in-flight flag and, while a
run is active, the backup working tree and its repository.
"""

import asyncio
from typing import Any, Dict, Optional

from vulkan.backup.config import BackupConfig
from vulkan.backup.copy import copy_files
from vulkan.backup.credentials import Credentials, build_credentials, redact_url
from vulkan.backup.models import BackupOutcome, BackupRun
from vulkan.backup.sync import sync_to_remote
from vulkan.backup.vcs import GitPythonBackend, SubprocessGitBackend, VcsBackend
from vulkan.exceptions import BackupError
from vulkan.logger import Logger


class BackupManager:
    """Copy the data directory into a git working tree and push it, one run at a time.

    Example:
        manager = BackupManager(BackupConfig.from_env(env, production=True, data_dir=data_dir), logger)
        await manager.initialize()
        run = await manager.backup_data("POST /vault/spend")
    """

    def __init__(
        self,
        config: BackupConfig,
        logger: Logger,
        primary: Optional[VcsBackend] = None,
        fallback: Optional[VcsBackend] = None,
        credentials: Optional[Credentials] = None,
    ):
        self.config = config
        self.logger = logger
        self.credentials = credentials or build_credentials(config)
        self.is_backing_up = False

        # Repository handles exist only in production mode, once initialized
        self.primary: Optional[VcsBackend] = primary
        self.fallback: Optional[VcsBackend] = fallback
        self._initialized = False

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _build_backends(self) -> VcsBackend:
        env = self.credentials.git_env()
        if self.primary is None:
            self.primary = GitPythonBackend(self.config.backup_dir, env)
        if self.fallback is None:
            self.fallback = SubprocessGitBackend(self.config.backup_dir, env, logger=self.logger)
        return self.primary

    async def _prepare_repository(self, backend: VcsBackend) -> None:
        await backend.init()
        if self.config.repo_url:
            await backend.ensure_remote(
                self.config.remote_name,
                self.credentials.remote_url(self.config.repo_url),
            )

    async def initialize(self) -> None:
        """Prepare the backup directory, credentials and repository.

        Safe to call repeatedly; does nothing outside production mode.

        Raises:
            BackupError: If the backup directory or credentials cannot be
                written, or neither backend can set up the repository
        """
        if not self.enabled:
            self.logger.info("Backups disabled outside production mode")
            return

        try:
            self.config.backup_dir.mkdir(parents=True, exist_ok=True)
            self.credentials.prepare()
        except OSError as e:
            raise BackupError(f"Failed to prepare backup directory: {e}") from e
        primary = self._build_backends()

        try:
            await self._prepare_repository(primary)
        except Exception as e:
            if self.fallback is None:
                raise BackupError(f"Failed to initialize backup repository: {e}") from e
            self.logger.warning(
                "Repository setup failed, falling back to git commands",
                backend=primary.name,
                error=str(e),
            )
            try:
                await self._prepare_repository(self.fallback)
            except Exception as fallback_error:
                raise BackupError(
                    f"Failed to initialize backup repository: {fallback_error}"
                ) from fallback_error

        self._initialized = True
        self.logger.info(
            "Backup repository ready",
            backup_dir=str(self.config.backup_dir),
            source_dir=str(self.config.source_dir),
            remote=redact_url(self.config.repo_url) if self.config.repo_url else "-",
            credential=self.credentials.name,
        )

    async def backup_data(self, trigger: str = "unknown") -> BackupRun:
        """Run one backup: copy the data files, then commit and push.

        Never raises. Returns immediately with skipped-disabled outside
        production mode and with skipped-concurrent while another run is in
        flight; concurrent triggers are dropped, not queued.
        """
        if not self.enabled:
            return BackupRun(
                trigger=trigger,
                outcome=BackupOutcome.SKIPPED_DISABLED,
                message="Development mode - backup disabled",
            )

        # Check and set with no await in between
        if self.is_backing_up:
            self.logger.info("Backup already in progress, skipping", trigger=trigger)
            return BackupRun(
                trigger=trigger,
                outcome=BackupOutcome.SKIPPED_CONCURRENT,
                message="Backup already in progress",
            )
        self.is_backing_up = True

        try:
            self.logger.info(f"Starting backup triggered by: {trigger}")
            if not self._initialized or self.primary is None:
                raise BackupError("Backup repository not initialized", code="NOT_INITIALIZED")

            await asyncio.to_thread(
                copy_files, self.config.source_dir, self.config.backup_dir, self.logger
            )
            return await sync_to_remote(
                self.primary, self.fallback, trigger, self.config, self.logger
            )
        except Exception as e:
            self.logger.error("Backup failed", trigger=trigger, error=str(e), exc_info=True)
            return BackupRun(
                trigger=trigger,
                outcome=BackupOutcome.FAILED,
                message="Backup failed",
                error=e.message if isinstance(e, BackupError) else str(e),
            )
        finally:
            self.is_backing_up = False

    async def get_status(self) -> Dict[str, Any]:
        """Snapshot of the backup state for diagnostics."""
        backup_dir = self.config.backup_dir
        files = (
            sorted(p.name for p in backup_dir.iterdir() if p.name != ".git")
            if backup_dir.is_dir()
            else []
        )
        status: Dict[str, Any] = {
            "enabled": self.enabled,
            "initialized": self._initialized,
            "is_backing_up": self.is_backing_up,
            "source_dir": str(self.config.source_dir),
            "backup_dir": str(backup_dir),
            "files": files,
        }

        if self._initialized and self.primary is not None:
            try:
                status["branch"] = await self.primary.current_branch()
                status["latest"] = await self.primary.head_summary()
                status["is_clean"] = not await self.primary.has_changes()
            except Exception as e:
                status["error"] = str(e)

        return status

    async def shutdown(self) -> None:
        """Remove staged credential material."""
        self.credentials.cleanup()
