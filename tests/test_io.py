"""Tests for jobrender.rendering.io."""

from __future__ import annotations

import stat

from jobrender.core.models import RenderedArtifact
from jobrender.rendering.io import atomic_write_text, write_artifacts


def _mode(path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


class TestAtomicWriteText:
    def test_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "file.txt"
        atomic_write_text(path, "hello")
        assert path.read_text() == "hello"

    def test_no_newline_translation(self, tmp_path):
        path = tmp_path / "cert.pem"
        atomic_write_text(path, "line1\r\nline2")
        assert path.read_bytes() == b"line1\r\nline2"

    def test_mode_applied(self, tmp_path):
        path = tmp_path / "key"
        atomic_write_text(path, "k", mode=0o600)
        assert _mode(path) == 0o600

    def test_overwrites_and_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "file.txt"
        atomic_write_text(path, "one")
        atomic_write_text(path, "two")
        assert path.read_text() == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["file.txt"]


class TestWriteArtifacts:
    def test_modes_by_artifact_type(self, tmp_path):
        artifacts = [
            RenderedArtifact(name="bin/run", text="#!/bin/bash\n", executable=True),
            RenderedArtifact(name="config/certs/server.key", text="k", secret=True),
            RenderedArtifact(name="config/certs/ca.crt", text="c"),
        ]
        outputs = write_artifacts(artifacts, tmp_path)

        assert outputs == [tmp_path / a.name for a in artifacts]
        assert _mode(tmp_path / "bin/run") == 0o755
        assert _mode(tmp_path / "config/certs/server.key") == 0o600
        assert _mode(tmp_path / "config/certs/ca.crt") == 0o644
