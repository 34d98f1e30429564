"""Tests for the backup copy stage."""

from pathlib import Path

from vulkan.backup import copy_files


class TestCopyFiles:
    def test_copies_top_level_files(self, tmp_path, logger):
        source = tmp_path / "data"
        source.mkdir()
        (source / "financial_data.csv").write_text("Date,Name\n")
        (source / "notes.md").write_bytes(b"**note**\n")

        copied = copy_files(source, tmp_path / "backup", logger)

        assert copied == ["financial_data.csv", "notes.md"]
        assert (tmp_path / "backup" / "financial_data.csv").read_text() == "Date,Name\n"
        assert (tmp_path / "backup" / "notes.md").read_bytes() == b"**note**\n"

    def test_overwrites_existing_copies(self, tmp_path, logger):
        source = tmp_path / "data"
        backup = tmp_path / "backup"
        source.mkdir()
        backup.mkdir()
        (source / "budget.json").write_text('{"new": 1}')
        (backup / "budget.json").write_text('{"old": 1}')

        copy_files(source, backup, logger)

        assert (backup / "budget.json").read_text() == '{"new": 1}'

    def test_skips_subdirectories(self, tmp_path, logger):
        source = tmp_path / "data"
        (source / "archive").mkdir(parents=True)
        (source / "archive" / "old.csv").write_text("x")
        (source / "tasks.md").write_text("t")

        copied = copy_files(source, tmp_path / "backup", logger)

        assert copied == ["tasks.md"]
        assert not (tmp_path / "backup" / "archive").exists()

    def test_never_deletes_from_backup(self, tmp_path, logger):
        source = tmp_path / "data"
        backup = tmp_path / "backup"
        source.mkdir()
        backup.mkdir()
        (backup / "removed.md").write_text("still here")

        copy_files(source, backup, logger)

        assert (backup / "removed.md").read_text() == "still here"

    def test_missing_source_is_created_empty(self, tmp_path, logger):
        source = tmp_path / "data"

        copied = copy_files(source, tmp_path / "backup", logger)

        assert copied == []
        assert source.is_dir()
        logger.warning.assert_called_once()

    def test_unreadable_file_is_skipped(self, tmp_path, logger, monkeypatch):
        source = tmp_path / "data"
        source.mkdir()
        (source / "a.csv").write_text("a")
        (source / "locked.json").write_text("secret")
        (source / "z.md").write_text("z")

        original = Path.read_bytes

        def read_bytes(self):
            if self.name == "locked.json":
                raise PermissionError(13, "Permission denied")
            return original(self)

        monkeypatch.setattr(Path, "read_bytes", read_bytes)

        copied = copy_files(source, tmp_path / "backup", logger)

        assert copied == ["a.csv", "z.md"]
        assert not (tmp_path / "backup" / "locked.json").exists()
        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["file"] == "locked.json"
