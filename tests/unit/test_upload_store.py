import io
from datetime import datetime
from pathlib import Path

import pytest

from upload_vault.processor.upload_store import (
    UploadStore,
    sanitize_filename,
    upload_dir_path,
)


class TestSanitizeFilename:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("report.csv", "report.csv"),
            ("../../etc/passwd", "passwd"),
            ("C:\\Users\\me\\clip.mp4", "clip.mp4"),
            ("my song (live).mp3", "my_song_live_.mp3"),
            ("...", "upload"),
            ("", "upload"),
        ],
    )
    def test_strips_directories_and_unsafe_characters(self, name: str, expected: str) -> None:
        assert sanitize_filename(name) == expected


class TestUploadDirPath:
    def test_date_then_user(self) -> None:
        path = upload_dir_path(Path("/up"), "alice", datetime(2024, 3, 9, 12, 0))

        assert path == Path("/up/2024-03-09/alice")


class TestSave:
    def test_writes_bytes_under_dated_user_directory(self, tmp_path: Path) -> None:
        store = UploadStore(tmp_path)

        raw = store.save(
            io.BytesIO(b"a,b\n1,2\n"), "prices.csv", "bob", now=datetime(2024, 1, 2)
        )

        assert raw.path.parent == tmp_path / "2024-01-02" / "bob"
        assert raw.path.read_bytes() == b"a,b\n1,2\n"
        assert raw.path.name.endswith("-prices.csv")
        assert raw.size == 8
        assert raw.original_name == "prices.csv"
        assert raw.uploaded_by == "bob"

    def test_same_name_twice_gets_distinct_paths(self, tmp_path: Path) -> None:
        store = UploadStore(tmp_path)

        first = store.save(io.BytesIO(b"1"), "a.mp3", "bob")
        second = store.save(io.BytesIO(b"2"), "a.mp3", "bob")

        assert first.path != second.path

    def test_zero_byte_upload_is_recorded(self, tmp_path: Path) -> None:
        raw = UploadStore(tmp_path).save(io.BytesIO(b""), "empty.mp3", "bob")

        assert raw.size == 0


class TestArtifactPathAndDiscard:
    def test_artifact_sits_next_to_plaintext(self) -> None:
        assert UploadStore.artifact_path(Path("/up/x/1-a.csv")) == Path("/up/x/1-a.csv.enc")

    def test_discard_is_idempotent(self, tmp_path: Path) -> None:
        path = tmp_path / "f.bin"
        path.write_bytes(b"x")

        UploadStore.discard(path)
        UploadStore.discard(path)

        assert not path.exists()
