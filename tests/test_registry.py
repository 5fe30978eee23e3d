from pathlib import Path

import pytest

from gap_engine.buffer import (
    BufferFileNotFoundError,
    BufferIOError,
    InvalidArgumentError,
    RenameConflictError,
)
from gap_engine.config import BufferConfig
from gap_engine.files import BufferRegistry
from gap_engine.files import persistence


def make_registry() -> BufferRegistry:
    return BufferRegistry(config=BufferConfig(newline="\n"))


def test_open_caches_one_buffer_per_path(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_text("hello\n")
    (tmp_path / "sub").mkdir()
    registry = make_registry()

    first = registry.open(path)
    second = registry.open(tmp_path / "sub" / ".." / "a.txt")

    assert first is second
    assert len(registry) == 1
    assert path in registry
    assert registry.get(str(path)) is first


def test_open_missing_without_create(tmp_path: Path) -> None:
    registry = make_registry()

    with pytest.raises(BufferFileNotFoundError):
        registry.open(tmp_path / "nope.txt")

    assert len(registry) == 0


def test_open_with_create_then_release(tmp_path: Path) -> None:
    registry = make_registry()
    path = tmp_path / "draft.txt"

    buffer = registry.open(path, create_if_missing=True)
    buffer.insert("draft")

    assert registry.stats().modified_count == 1
    assert registry.release(path) is buffer
    assert path not in registry
    assert registry.release(path) is None
    assert not path.exists()

    reopened = registry.open(path, create_if_missing=True)
    assert reopened is not buffer
    assert reopened.length() == 0


def test_rename_rekeys_buffer(tmp_path: Path) -> None:
    path = tmp_path / "old.txt"
    path.write_text("content\n")
    registry = make_registry()
    buffer = registry.open(path)

    renamed = registry.rename(path, tmp_path / "new.txt")

    assert renamed is buffer
    assert path not in registry
    assert registry.get(tmp_path / "new.txt") is buffer
    assert (tmp_path / "new.txt").read_text() == "content\n"


def test_rename_onto_another_open_buffer_conflicts(tmp_path: Path) -> None:
    registry = make_registry()
    left = registry.open(tmp_path / "left.txt", create_if_missing=True)
    right = registry.open(tmp_path / "right.txt", create_if_missing=True)

    with pytest.raises(RenameConflictError):
        registry.rename(tmp_path / "left.txt", tmp_path / "right.txt", overwrite=True)

    assert registry.get(tmp_path / "left.txt") is left
    assert registry.get(tmp_path / "right.txt") is right


def test_rename_unknown_buffer(tmp_path: Path) -> None:
    registry = make_registry()

    with pytest.raises(InvalidArgumentError):
        registry.rename(tmp_path / "ghost.txt", tmp_path / "other.txt")


def test_stats(tmp_path: Path) -> None:
    registry = make_registry()
    registry.open(tmp_path / "b.txt", create_if_missing=True)
    registry.open(tmp_path / "a.txt", create_if_missing=True)

    stats = registry.stats()

    assert stats.buffer_count == 2
    assert stats.modified_count == 0
    assert stats.paths == tuple(
        sorted(str((tmp_path / name).resolve()) for name in ("a.txt", "b.txt"))
    )
    assert sorted(registry.paths()) == sorted(
        (tmp_path / name).resolve() for name in ("a.txt", "b.txt")
    )


def test_failed_rename_keeps_buffer_on_old_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    old = tmp_path / "old.txt"
    new = tmp_path / "new.txt"
    old.write_text("content\n")
    registry = make_registry()
    buffer = registry.open(old)

    def failing_write(*args: object, **kwargs: object) -> None:
        raise BufferIOError("disk full", path=new)

    monkeypatch.setattr(persistence, "write_buffer_to", failing_write)

    with pytest.raises(BufferIOError):
        registry.rename(old, new)

    assert buffer.path == old
    assert registry.get(old) is buffer
    assert new not in registry

    monkeypatch.undo()
    second = registry.open(new, create_if_missing=True)
    assert second is not buffer
    assert second.path != buffer.path
