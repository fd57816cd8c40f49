"""Shared fixtures and fakes for external tools."""

import tarfile
from fnmatch import fnmatch
from pathlib import Path

import pytest
from loguru import logger

from rhs_packaging.tarball.config import load_manifest
from rhs_packaging.utils import event_logging


@pytest.fixture(autouse=True)
def events_file(tmp_path, monkeypatch):
    """Send packaging events to a per-test file and drop log sinks afterwards."""
    path = tmp_path / "logs" / "packaging_events.log"
    monkeypatch.setattr(event_logging, "PACKAGING_EVENTS_FILE", path)
    yield path
    logger.remove()


@pytest.fixture
def manifest():
    return load_manifest()


@pytest.fixture
def source_tree(tmp_path):
    """
    Source directory from the release example:

        install.sh  README.md  VERSION(2.0)  bin/a.sh  bin/b.sh
    """
    source = tmp_path / "src"
    (source / "bin").mkdir(parents=True)
    (source / "install.sh").write_text("#!/bin/bash\necho install\n")
    (source / "README.md").write_text("# rhs-hadoop-install\n")
    (source / "VERSION").write_text("2.0\n")
    (source / "bin" / "a.sh").write_text("echo a\n")
    (source / "bin" / "b.sh").write_text("echo b\n")
    return source


class FakeVersioner:
    def __init__(self, tag=None):
        self.tag = tag
        self.calls = []

    def latest_tag(self, source_dir):
        self.calls.append(Path(source_dir))
        return self.tag


class FakeArchiver:
    """Writes a real .tar.gz with tarfile, applying excludes like `tar --exclude`."""

    def __init__(self):
        self.calls = []
        self.staged = []

    def create(self, archive_path, staging_dir, cwd, excludes):
        self.calls.append((archive_path, staging_dir, cwd, tuple(excludes)))
        self.staged = sorted(
            p.relative_to(staging_dir).as_posix() for p in staging_dir.rglob("*") if p.is_file()
        )

        def _filter(info):
            name = info.name.rsplit("/", 1)[-1]
            return None if any(fnmatch(name, pattern) for pattern in excludes) else info

        output = cwd / archive_path.name
        with tarfile.open(output, "w:gz") as tf:
            tf.add(staging_dir, arcname=staging_dir.name, filter=_filter)
        return [output]


class NoOutputArchiver:
    def create(self, archive_path, staging_dir, cwd, excludes):
        return []


class DoubleOutputArchiver(FakeArchiver):
    def create(self, archive_path, staging_dir, cwd, excludes):
        produced = super().create(archive_path, staging_dir, cwd, excludes)
        extra = cwd / f"copy-{archive_path.name}"
        extra.write_bytes(produced[0].read_bytes())
        return produced + [extra]


class FakeMover:
    def __init__(self):
        self.moves = []

    def move(self, src, target_dir):
        destination = target_dir / src.name
        src.rename(destination)
        self.moves.append((src, destination))
        return destination


def archive_members(path):
    """Names of the regular files inside a tarball."""
    with tarfile.open(path, "r:gz") as tf:
        return sorted(m.name for m in tf.getmembers() if m.isfile())
