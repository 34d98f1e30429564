"""Markdown note appender."""

import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from vulkan.exceptions import ValidationError

NOTE_TYPES = ("note", "task", "bookmark")


def format_entry(note_type: str, body: str, when: Optional[datetime] = None) -> str:
    when = when or datetime.now(timezone.utc)
    timestamp = when.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"**[{timestamp}] - {note_type.capitalize()}**\n{body}\n\n"


class NotesWriter:
    """Appends notes, tasks and bookmarks to <type>s.md in the data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self._lock = threading.Lock()

    def append(self, note_type: str, body: str) -> Dict[str, Any]:
        if note_type not in NOTE_TYPES:
            raise ValidationError(
                code="INVALID_NOTE_TYPE",
                message=f"Invalid type. Must be one of: {', '.join(NOTE_TYPES)}",
            )
        if not isinstance(body, str) or not body.strip():
            raise ValidationError(code="EMPTY_BODY", message="Body must be a non-empty string")

        now = datetime.now(timezone.utc)
        filename = f"{note_type}s.md"
        with self._lock:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with (self.data_dir / filename).open("a", encoding="utf-8") as fh:
                fh.write(format_entry(note_type, body.strip(), now))

        return {
            "success": True,
            "type": note_type,
            "filename": filename,
            "timestamp": now.isoformat(),
        }
