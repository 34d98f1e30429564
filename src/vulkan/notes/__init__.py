"""Markdown notes, tasks and bookmarks."""

from vulkan.notes.writer import NOTE_TYPES, NotesWriter, format_entry

__all__ = ["NotesWriter", "NOTE_TYPES", "format_entry"]
