"""Unit tests for staging, archive verification and relocation."""

from pathlib import Path

import pytest

from conftest import DoubleOutputArchiver, FakeArchiver, FakeMover, NoOutputArchiver, archive_members
from rhs_packaging.tarball.archiver import (
    ShutilMover,
    TarArchiver,
    archive_name,
    build_tarball,
    stage_files,
    verify_single_archive,
)
from rhs_packaging.tarball.collector import collect_files
from rhs_packaging.tarball.config import build_config
from rhs_packaging.tarball.exceptions import (
    ArchiveCountError,
    ArchiveCreationError,
    ArchiveRelocationError,
    StagingError,
)


class FailingArchiver:
    def create(self, archive_path, staging_dir, cwd, excludes):
        assert staging_dir.is_dir()
        raise ArchiveCreationError("creation of tarball failed.", stderr="disk full")


class FailingMover:
    def move(self, src, target_dir):
        raise PermissionError(13, "Permission denied", str(target_dir))


@pytest.fixture
def workdir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.mark.unit
def test_archive_name():
    assert archive_name("rhs-hadoop-install", "2_0") == "rhs-hadoop-install-2_0.tar.gz"


@pytest.mark.unit
def test_stage_files_keeps_parents(source_tree, tmp_path):
    staging = tmp_path / "stage"
    (staging / "stale").mkdir(parents=True)

    stage_files([Path("install.sh"), Path("bin/a.sh")], source_tree, staging)

    assert (staging / "install.sh").read_text() == "#!/bin/bash\necho install\n"
    assert (staging / "bin" / "a.sh").is_file()
    assert not (staging / "stale").exists()


@pytest.mark.unit
def test_verify_single_archive(tmp_path):
    expected = tmp_path / "pkg.tar.gz"
    expected.write_bytes(b"x")
    assert verify_single_archive([expected], expected) == expected


@pytest.mark.unit
def test_verify_no_archive(tmp_path):
    with pytest.raises(ArchiveCountError, match="found 0"):
        verify_single_archive([], tmp_path / "pkg.tar.gz")


@pytest.mark.unit
def test_verify_reported_but_missing_archive(tmp_path):
    """A path that was reported but does not exist does not count."""
    with pytest.raises(ArchiveCountError):
        verify_single_archive([tmp_path / "pkg.tar.gz"], tmp_path / "pkg.tar.gz")


@pytest.mark.unit
def test_verify_two_archives(tmp_path):
    expected = tmp_path / "pkg.tar.gz"
    other = tmp_path / "other.tar.gz"
    expected.write_bytes(b"x")
    other.write_bytes(b"y")

    with pytest.raises(ArchiveCountError, match="found 2"):
        verify_single_archive([expected, other], expected)


@pytest.mark.unit
def test_build_tarball_moves_to_target(source_tree, workdir, manifest):
    """The tarball is built in the working directory and moved to the target."""
    config = build_config(source=source_tree, manifest=manifest)
    files = collect_files(config)
    archiver, mover = FakeArchiver(), FakeMover()

    final = build_tarball(config, "2_0", files, archiver, mover, workdir)

    assert final == source_tree.resolve() / "rhs-hadoop-install-2_0.tar.gz"
    assert final.is_file()
    assert not (workdir / "rhs-hadoop-install-2_0.tar.gz").exists()
    assert not (workdir / "rhs-hadoop-install-2_0").exists()
    assert len(mover.moves) == 1
    assert archive_members(final) == [
        "rhs-hadoop-install-2_0/README.md",
        "rhs-hadoop-install-2_0/VERSION",
        "rhs-hadoop-install-2_0/bin/a.sh",
        "rhs-hadoop-install-2_0/bin/b.sh",
        "rhs-hadoop-install-2_0/install.sh",
    ]


@pytest.mark.unit
def test_build_tarball_target_is_workdir(source_tree, manifest):
    """No move happens when the target is the working directory."""
    config = build_config(source=source_tree, manifest=manifest)
    mover = FakeMover()

    final = build_tarball(config, "2_0", collect_files(config), FakeArchiver(), mover, source_tree)

    assert final == source_tree.resolve() / "rhs-hadoop-install-2_0.tar.gz"
    assert final.is_file()
    assert mover.moves == []


@pytest.mark.unit
def test_build_tarball_passes_excludes(source_tree, workdir, manifest):
    (source_tree / "FIRST_PREP_REPO.sh").write_text("echo prep\n")
    (source_tree / "bin" / ".a.sh.swp").write_text("swap\n")
    config = build_config(source=source_tree, manifest=manifest)
    archiver = FakeArchiver()

    final = build_tarball(config, "2_0", collect_files(config), archiver, FakeMover(), workdir)

    _, _, cwd, excludes = archiver.calls[0]
    assert cwd == workdir.resolve()
    assert excludes == ("FIRST_PREP_REPO.sh", "*swp")
    # Staged, then dropped by the archive utility
    assert "FIRST_PREP_REPO.sh" in archiver.staged
    members = archive_members(final)
    assert "rhs-hadoop-install-2_0/FIRST_PREP_REPO.sh" not in members
    assert "rhs-hadoop-install-2_0/bin/.a.sh.swp" not in members


@pytest.mark.unit
def test_build_tarball_replaces_previous_archive(source_tree, workdir, manifest):
    stale = workdir / "rhs-hadoop-install-2_0.tar.gz"
    stale.write_bytes(b"stale")
    config = build_config(source=source_tree, target_dir=workdir, manifest=manifest)

    final = build_tarball(config, "2_0", collect_files(config), FakeArchiver(), FakeMover(), workdir)

    assert final == stale
    assert final.read_bytes() != b"stale"


@pytest.mark.unit
def test_staging_removed_when_archiver_fails(source_tree, workdir, manifest):
    config = build_config(source=source_tree, manifest=manifest)

    with pytest.raises(ArchiveCreationError, match="disk full"):
        build_tarball(config, "2_0", collect_files(config), FailingArchiver(), FakeMover(), workdir)

    assert not (workdir / "rhs-hadoop-install-2_0").exists()


@pytest.mark.unit
@pytest.mark.parametrize("archiver_cls", [NoOutputArchiver, DoubleOutputArchiver])
def test_wrong_archive_count_fails(source_tree, workdir, manifest, archiver_cls):
    config = build_config(source=source_tree, manifest=manifest)
    mover = FakeMover()

    with pytest.raises(ArchiveCountError, match="creation of tarball failed"):
        build_tarball(config, "2_0", collect_files(config), archiver_cls(), mover, workdir)

    assert mover.moves == []
    assert not (workdir / "rhs-hadoop-install-2_0").exists()


@pytest.mark.unit
def test_tar_archiver_missing_binary(source_tree, workdir, manifest):
    config = build_config(source=source_tree, manifest=manifest)
    archiver = TarArchiver(tar_bin=str(workdir / "no-such-tar"))

    with pytest.raises(ArchiveCreationError):
        build_tarball(config, "2_0", collect_files(config), archiver, FakeMover(), workdir)

    assert not (workdir / "rhs-hadoop-install-2_0").exists()


@pytest.mark.unit
def test_stage_files_missing_source(source_tree, tmp_path):
    """A file that vanished after collection is reported as a packaging error."""
    with pytest.raises(StagingError, match="could not stage files"):
        stage_files([Path("install.sh"), Path("gone.sh")], source_tree, tmp_path / "stage")


@pytest.mark.unit
def test_move_failure_cleans_workdir(source_tree, workdir, manifest):
    config = build_config(source=source_tree, manifest=manifest)

    with pytest.raises(ArchiveRelocationError, match="Permission denied"):
        build_tarball(config, "2_0", collect_files(config), FakeArchiver(), FailingMover(), workdir)

    assert list(workdir.iterdir()) == []
    assert not list(source_tree.glob("*.tar.gz"))


@pytest.mark.unit
def test_shutil_mover_refuses_directory_in_the_way(source_tree, workdir, manifest):
    """A directory named like the tarball in the target is not written into."""
    blocker = source_tree / "rhs-hadoop-install-2_0.tar.gz"
    blocker.mkdir()
    config = build_config(source=source_tree, manifest=manifest)

    with pytest.raises(ArchiveRelocationError, match="could not move rhs-hadoop-install-2_0.tar.gz"):
        build_tarball(config, "2_0", collect_files(config), FakeArchiver(), ShutilMover(), workdir)

    assert blocker.is_dir()
    assert list(blocker.iterdir()) == []
    assert list(workdir.iterdir()) == []


@pytest.mark.unit
def test_shutil_mover_moves_file(tmp_path):
    src = tmp_path / "pkg.tar.gz"
    src.write_bytes(b"x")
    target = tmp_path / "out"
    target.mkdir()

    assert ShutilMover().move(src, target) == target / "pkg.tar.gz"
    assert (target / "pkg.tar.gz").read_bytes() == b"x"
    assert not src.exists()
