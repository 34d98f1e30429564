"""Copy stage: mirror the live data files into the backup working tree."""

from pathlib import Path
from typing import List

from vulkan.logger import Logger


def copy_files(source_dir: Path, backup_dir: Path, logger: Logger) -> List[str]:
    """Copy every top-level regular file from source_dir into backup_dir.

    Additive only: files that disappeared from the source are left in the
    backup. Subdirectories are skipped, not recursed into. A file that fails
    to copy is logged and skipped so the rest still make it.

    Returns:
        Names of the files copied
    """
    source_dir = Path(source_dir)
    backup_dir = Path(backup_dir)

    if not source_dir.exists():
        logger.warning("Source directory missing, creating it empty", source_dir=str(source_dir))
        source_dir.mkdir(parents=True, exist_ok=True)
        return []

    backup_dir.mkdir(parents=True, exist_ok=True)

    copied: List[str] = []
    for entry in sorted(source_dir.iterdir()):
        try:
            if not entry.is_file():
                continue
            (backup_dir / entry.name).write_bytes(entry.read_bytes())
        except OSError as e:
            logger.error("Failed to copy file", file=entry.name, error=str(e))
            continue
        copied.append(entry.name)

    logger.debug("Copied data files", count=len(copied), backup_dir=str(backup_dir))
    return copied
