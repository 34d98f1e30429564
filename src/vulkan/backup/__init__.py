"""Vulkan backup module

Git-based backup of the data directory, triggered after state-mutating API
calls.

Usage:
    from vulkan.backup import BackupConfig, BackupManager

    config = BackupConfig.from_env(env, production=True, data_dir=Path("data"))
    manager = BackupManager(config, logger)
    await manager.initialize()
    run = await manager.backup_data("POST /well")
"""

from vulkan.backup.config import BackupConfig
from vulkan.backup.copy import copy_files
from vulkan.backup.credentials import (
    Credentials,
    NoCredentials,
    SshKeyCredentials,
    TokenCredentials,
    build_credentials,
)
from vulkan.backup.manager import BackupManager
from vulkan.backup.models import BackupOutcome, BackupRun
from vulkan.backup.sync import build_commit_message, commit_and_push, sync_to_remote
from vulkan.backup.vcs import Author, GitPythonBackend, SubprocessGitBackend, VcsBackend

__all__ = [
    "BackupConfig",
    "BackupManager",
    "BackupOutcome",
    "BackupRun",
    "copy_files",
    "sync_to_remote",
    "commit_and_push",
    "build_commit_message",
    "Credentials",
    "NoCredentials",
    "SshKeyCredentials",
    "TokenCredentials",
    "build_credentials",
    "Author",
    "VcsBackend",
    "GitPythonBackend",
    "SubprocessGitBackend",
]
