"""Fire-and-forget backups after state-mutating requests.

The backup task is attached to the response as a Starlette BackgroundTask,
so it starts only once the response has been sent, and whatever happens in
it can no longer affect that response.
"""

from typing import Optional

from starlette.background import BackgroundTask
from starlette.requests import Request

from vulkan.backup import BackupManager, BackupOutcome, BackupRun
from vulkan.logger import Logger
from vulkan.web.middleware import get_context


async def run_backup(manager: BackupManager, logger: Logger, trigger: str) -> Optional[BackupRun]:
    """Run one backup and log how it ended; errors stop here."""
    try:
        run = await manager.backup_data(trigger)
    except Exception as e:
        logger.error("Background backup crashed", trigger=trigger, error=str(e), exc_info=True)
        return None

    if run.outcome is BackupOutcome.FAILED:
        logger.error("Background backup failed", trigger=trigger, error=run.error)
    elif run.outcome is not BackupOutcome.SKIPPED_DISABLED:
        logger.info("Background backup finished", trigger=trigger, outcome=run.outcome.value)
    return run


def schedule_backup(request: Request, trigger: Optional[str] = None) -> BackgroundTask:
    """Background task backing up the data directory, labelled "<METHOD> <path>"."""
    context = get_context(request)
    label = trigger or f"{request.method} {request.url.path}"
    return BackgroundTask(run_backup, context.backup, context.logger, label)
