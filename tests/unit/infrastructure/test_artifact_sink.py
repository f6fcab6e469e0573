from __future__ import annotations
import os
from pathlib import Path
import pytest
from stats_export.infrastructure.artifact_sink import FileSystemArtifactSink
from stats_export.shared.errors import DeliveryError


def test_deliver_creates_directory_and_writes_bytes(tmp_path: Path) -> None:
    sink = FileSystemArtifactSink(tmp_path / "output")

    path = sink.deliver("report.pdf", b"%PDF-1.4")

    assert path == (tmp_path / "output" / "report.pdf").resolve()
    assert path.read_bytes() == b"%PDF-1.4"
    assert os.listdir(tmp_path / "output") == ["report.pdf"]

def test_deliver_overwrites_existing_file(tmp_path: Path) -> None:
    sink = FileSystemArtifactSink(tmp_path)
    sink.deliver("chart.png", b"old")

    path = sink.deliver("chart.png", b"new")

    assert path.read_bytes() == b"new"

@pytest.mark.parametrize("filename", ["", "../escape.csv", "sub/dir.csv"])
def test_deliver_rejects_names_with_paths(tmp_path: Path, filename: str) -> None:
    with pytest.raises(DeliveryError):
        FileSystemArtifactSink(tmp_path).deliver(filename, b"x")

    assert list(tmp_path.iterdir()) == []

def test_failed_write_leaves_no_partial_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_replace(src: str, dst: str) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("stats_export.infrastructure.artifact_sink.os.replace", broken_replace)

    with pytest.raises(DeliveryError):
        FileSystemArtifactSink(tmp_path).deliver("report.pdf", b"%PDF")

    assert list(tmp_path.iterdir()) == []
