"""Path-keyed cache guaranteeing one live buffer per file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional

from gap_engine.buffer import Buffer, InvalidArgumentError, RenameConflictError
from gap_engine.config import BufferConfig
from gap_engine.runtime.telemetry import span

from .persistence import PathLike, open_buffer, rename_buffer


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    buffer_count: int
    modified_count: int
    paths: tuple[str, ...]


class BufferRegistry:
    """Owns the open buffers, keyed by resolved path."""

    def __init__(
        self,
        *,
        config: Optional[BufferConfig] = None,
        logger_name: str | None = None,
    ) -> None:
        self._config = config
        self._buffers: Dict[Path, Buffer] = {}
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._buffers)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return _key(path) in self._buffers

    def paths(self) -> Iterator[Path]:
        yield from self._buffers

    def get(self, path: PathLike) -> Optional[Buffer]:
        return self._buffers.get(_key(path))

    def open(self, path: PathLike, create_if_missing: bool = False) -> Buffer:
        key = _key(path)
        with span(
            "registry::open",
            logger_name=self._logger_name,
            component="registry",
            metadata={"path": key},
        ) as handle:
            cached = self._buffers.get(key)
            if cached is not None:
                handle.add_metadata("cached", True)
                return cached
            buffer = open_buffer(key, create_if_missing, config=self._config)
            self._buffers[key] = buffer
            return buffer

    def release(self, path: PathLike) -> Optional[Buffer]:
        """Forget the buffer for ``path``. Unsaved changes are not written."""

        with span(
            "registry::release",
            logger_name=self._logger_name,
            component="registry",
            metadata={"path": path},
        ) as handle:
            buffer = self._buffers.pop(_key(path), None)
            if buffer is not None and buffer.modified:
                handle.add_metadata("discarded_changes", True)
            return buffer

    def rename(
        self, path: PathLike, new_path: PathLike, *, overwrite: bool = False
    ) -> Buffer:
        """Rename the cached buffer for ``path`` and re-key it under ``new_path``."""

        old_key = _key(path)
        new_key = _key(new_path)
        with span(
            "registry::rename",
            logger_name=self._logger_name,
            component="registry",
            metadata={"from": old_key, "to": new_key},
        ) as handle:
            buffer = self._buffers.get(old_key)
            if buffer is None:
                handle.fail("missing_buffer")
                raise InvalidArgumentError(
                    f"No open buffer for '{old_key}'", value=old_key
                )
            displaced = self._buffers.get(new_key)
            if displaced is not None and displaced is not buffer:
                handle.add_metadata("conflict", new_key)
                raise RenameConflictError(new_key)
            previous = buffer.path
            try:
                rename_buffer(buffer, new_key, overwrite=overwrite)
            except Exception:
                # The buffer stays cached under its old key, so it keeps its old path.
                buffer.path = previous
                raise
            del self._buffers[old_key]
            self._buffers[new_key] = buffer
            return buffer

    def stats(self) -> RegistryStats:
        return RegistryStats(
            buffer_count=len(self._buffers),
            modified_count=sum(1 for b in self._buffers.values() if b.modified),
            paths=tuple(sorted(str(p) for p in self._buffers)),
        )


def _key(path: PathLike) -> Path:
    return Path(path).expanduser().resolve()


__all__ = ["BufferRegistry", "RegistryStats"]
