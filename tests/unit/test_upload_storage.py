from pathlib import Path

import pytest

from field_mapper.annotations.models import Process
from field_mapper.uploads.exceptions import EmptyUploadError, UploadTooLargeError
from field_mapper.uploads.file_store import UploadStorage, stored_filename


def _make_process(filename: str) -> Process:
    return Process(
        id="p1",
        original_name="form.pdf",
        filename=filename,
        path=f"/uploads/{filename}",
        created_at="2025-01-10T09:30:00.000Z",
    )


class TestStoredFilename:
    def test_prefixes_millis(self) -> None:
        assert stored_filename("form.pdf", millis=1700000000000) == "1700000000000-form.pdf"

    def test_sanitizes_unsafe_characters(self) -> None:
        assert stored_filename("my form (v2)ä.pdf", millis=1) == "1-my_form__v2__.pdf"

    def test_keeps_dashes_and_underscores(self) -> None:
        assert stored_filename("a-b_c.PDF", millis=5) == "5-a-b_c.PDF"


class TestUploadStorage:
    def test_save_writes_file(self, tmp_path: Path) -> None:
        storage = UploadStorage(tmp_path / "uploads")

        filename, path = storage.save("form.pdf", b"%PDF-1.4 data")

        assert filename.endswith("-form.pdf")
        assert path == f"/uploads/{filename}"
        assert (tmp_path / "uploads" / filename).read_bytes() == b"%PDF-1.4 data"

    def test_save_rejects_empty(self, tmp_path: Path) -> None:
        with pytest.raises(EmptyUploadError, match="No file uploaded"):
            UploadStorage(tmp_path).save("form.pdf", b"")

    def test_save_rejects_oversized(self, tmp_path: Path) -> None:
        with pytest.raises(UploadTooLargeError, match="exceeds limit of 4"):
            UploadStorage(tmp_path, max_bytes=4).save("form.pdf", b"12345")

    def test_load_reads_back(self, tmp_path: Path) -> None:
        storage = UploadStorage(tmp_path)
        filename, _path = storage.save("form.pdf", b"content")

        assert storage.load(_make_process(filename)) == b"content"

    def test_load_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            UploadStorage(tmp_path).load(_make_process("missing.pdf"))

    def test_load_ignores_directory_parts(self, tmp_path: Path) -> None:
        storage = UploadStorage(tmp_path / "uploads")
        (tmp_path / "secret.pdf").write_bytes(b"secret")

        with pytest.raises(FileNotFoundError):
            storage.load(_make_process("../secret.pdf"))
