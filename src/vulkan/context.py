"""Application context: the one object handed to every request handler.

Built once at startup. Holds the process-wide BackupManager (and with it the
in-flight backup flag) so handlers share it without module-level globals.
"""

from dataclasses import dataclass
from typing import Optional

from vulkan.backup import BackupConfig, BackupManager
from vulkan.config import Settings
from vulkan.ledger import BudgetStore, CategoryStore, LedgerStore
from vulkan.logger import Logger, get_logger
from vulkan.notes import NotesWriter
from vulkan.status import StatusChecker


@dataclass
class AppContext:
    settings: Settings
    logger: Logger
    backup: BackupManager
    status: StatusChecker
    ledger: LedgerStore
    categories: CategoryStore
    budget: BudgetStore
    notes: NotesWriter

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        logger: Optional[Logger] = None,
        backup: Optional[BackupManager] = None,
    ) -> "AppContext":
        logger = logger or get_logger()
        data_dir = settings.storage.data_dir

        if backup is None:
            backup_config = settings.backup or BackupConfig(
                enabled=False, source_dir=data_dir
            )
            backup = BackupManager(backup_config, logger)

        return cls(
            settings=settings,
            logger=logger,
            backup=backup,
            status=StatusChecker(settings.status_targets, settings.status_self_name, logger),
            ledger=LedgerStore(data_dir),
            categories=CategoryStore(data_dir),
            budget=BudgetStore(data_dir),
            notes=NotesWriter(data_dir),
        )
