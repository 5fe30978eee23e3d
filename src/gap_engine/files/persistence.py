"""Loading buffers from disk and writing them back with backup rotation."""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path
from typing import List, Optional

from gap_engine.buffer import (
    LINE_TERMINATOR,
    Buffer,
    BufferFileNotFoundError,
    BufferIOError,
    InvalidArgumentError,
    RenameConflictError,
)
from gap_engine.config import DEFAULT_CONFIG, BufferConfig
from gap_engine.runtime.telemetry import record_event, span

PathLike = Path | str


def open_buffer(
    path: PathLike,
    create_if_missing: bool = False,
    *,
    config: Optional[BufferConfig] = None,
) -> Buffer:
    """Return a buffer for ``path``, reading it when the file exists.

    A missing file raises :class:`BufferFileNotFoundError` unless
    ``create_if_missing`` is set, in which case an empty buffer bound to
    ``path`` is returned and nothing touches the disk until it is written.
    """

    target = Path(path)
    config = config or DEFAULT_CONFIG
    with span(
        "persistence::open",
        component="persistence",
        metadata={"path": target, "create": create_if_missing},
    ) as handle:
        if not target.exists():
            if not create_if_missing:
                raise BufferFileNotFoundError(target)
            handle.add_metadata("created", True)
            return Buffer(path=target, config=config)

        try:
            size = target.stat().st_size
        except OSError as exc:
            raise BufferIOError(f"Failed to stat '{target}': {exc}", path=target) from exc

        # Twice the file size leaves room to load and edit without regrowing.
        buffer = Buffer(
            path=target,
            capacity=2 * size or config.default_capacity,
            config=config,
        )
        read_buffer(buffer)
        return buffer


def read_buffer(buffer: Buffer) -> None:
    """Replace the buffer contents with its backing file.

    Every line is inserted followed by a terminator, so the loaded text always
    ends with one. Loading is not undoable: the undo log is emptied and the
    buffer counts as unmodified afterwards, with the cursor at the start.
    """

    path = _backing_path(buffer)
    with span(
        "persistence::read", component="persistence", metadata={"path": path}
    ) as handle:
        buffer.clear()
        lines = 0
        try:
            with path.open("r", encoding=buffer.config.encoding) as source:
                for line in source:
                    if line.endswith(LINE_TERMINATOR):
                        line = line[:-1]
                    buffer.insert(line + LINE_TERMINATOR, record=False)
                    lines += 1
        except FileNotFoundError as exc:
            raise BufferFileNotFoundError(path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise BufferIOError(f"Failed to read '{path}': {exc}", path=path) from exc

        buffer.history.clear()
        buffer.move_to(0)
        buffer.modified = False
        handle.add_metadata("lines", lines)


def write_buffer(buffer: Buffer) -> None:
    """Write the buffer to its own path, always keeping a backup."""

    write_buffer_to(buffer, _backing_path(buffer), backup=True)


def write_buffer_to(buffer: Buffer, target: PathLike, *, backup: bool) -> None:
    """Write the buffer contents to ``target``.

    With ``backup`` an existing ``target`` is first renamed to
    ``target + backup_suffix``, replacing any older backup. A write that fails
    partway may leave ``target`` truncated or partly written, and the backup
    rotation is not reversed.
    """

    target = Path(target)
    config = buffer.config
    with span(
        "persistence::write",
        component="persistence",
        metadata={"path": target, "backup": backup},
    ) as handle:
        if backup and target.exists():
            handle.add_metadata("backup_path", rotate_backup(target, config.backup_suffix))

        segments = _segments(buffer.text())
        try:
            with target.open("w", encoding=config.encoding, newline="") as sink:
                for segment in segments:
                    sink.write(segment)
                    sink.write(config.newline)
        except OSError as exc:
            raise BufferIOError(f"Failed to write '{target}': {exc}", path=target) from exc

        if buffer.path is not None and _same_file(buffer.path, target):
            buffer.modified = False
        handle.add_metadata("lines", len(segments))


def rename_buffer(buffer: Buffer, new_path: PathLike, *, overwrite: bool = False) -> None:
    """Rebind the buffer to ``new_path`` and write it there.

    An existing file at ``new_path`` raises :class:`RenameConflictError` unless
    ``overwrite`` is set; then it is moved aside to ``new_path + rename_suffix``
    first. The previous backing file is left in place.
    """

    target = Path(new_path)
    config = buffer.config
    with span(
        "persistence::rename",
        component="persistence",
        metadata={"from": buffer.path, "to": target, "overwrite": overwrite},
    ) as handle:
        if target.exists():
            if not overwrite:
                raise RenameConflictError(target)
            aside = suffixed(target, config.rename_suffix)
            _guarded_move(target, aside)
            handle.add_metadata("moved_aside", aside)
        buffer.path = target
        write_buffer(buffer)


def rotate_backup(target: Path, suffix: str) -> Path:
    """Move ``target`` to ``target + suffix``, deleting an older backup first."""

    backup = suffixed(target, suffix)
    try:
        if backup.exists():
            backup.unlink()
    except OSError as exc:
        raise BufferIOError(
            f"Failed to remove old backup '{backup}': {exc}", path=backup
        ) from exc
    _guarded_move(target, backup)
    record_event(
        "persistence.backup",
        level="debug",
        data={"path": target, "backup": backup},
    )
    return backup


def move_file(source: Path, destination: Path) -> None:
    """Rename atomically, copying only when the paths are on different devices."""

    try:
        os.replace(source, destination)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        shutil.copy2(source, destination)
        os.unlink(source)


def suffixed(path: Path, suffix: str) -> Path:
    return path.with_name(path.name + suffix)


def _guarded_move(source: Path, destination: Path) -> None:
    try:
        move_file(source, destination)
    except OSError as exc:
        raise BufferIOError(
            f"Failed to move '{source}' to '{destination}': {exc}", path=source
        ) from exc


def _segments(text: str) -> List[str]:
    segments = text.split(LINE_TERMINATOR)
    # A trailing terminator closes the last line rather than opening a new one.
    if segments[-1] == "":
        segments.pop()
    return segments


def _backing_path(buffer: Buffer) -> Path:
    if buffer.path is None:
        raise InvalidArgumentError("buffer has no backing path")
    return buffer.path


def _same_file(left: Path, right: Path) -> bool:
    return left.resolve() == right.resolve()


__all__ = [
    "move_file",
    "open_buffer",
    "read_buffer",
    "rename_buffer",
    "rotate_backup",
    "suffixed",
    "write_buffer",
    "write_buffer_to",
]
