from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .errors import ConfigSaveError

if TYPE_CHECKING:
    from .store import ConfigStore

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".new"
# Read/write for owner and group.
FILE_MODE = 0o660


def write_store(store: ConfigStore, fh: TextIO) -> None:
    """Serialize *store* to the text stream *fh*.

    Comment sections are written verbatim and every pair of consecutive
    sections is separated by a single newline.
    """
    sections = list(store.sections())
    for index, section in enumerate(sections):
        if section.is_comment and not len(section):
            fh.write(section.name)
        else:
            fh.write(f"[{section.name}]\n")
            for entry in section:
                fh.write(f"{entry.key} = {entry.value}\n")
        if index < len(sections) - 1:
            fh.write("\n")


def temp_path_for(path: Path) -> Path:
    return path.with_name(path.name + TEMP_SUFFIX)


@contextmanager
def _open_directory(directory: Path) -> Iterator[int | None]:
    # Directories cannot be opened for fsync on Windows.
    if os.name == "nt":
        yield None
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        yield fd
    finally:
        os.close(fd)


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("unable to remove %s: %s", tmp, exc)


def save(store: ConfigStore, path: str | os.PathLike[str], *, sync: bool = True) -> None:
    """Atomically write *store* to *path*.

    The store is written to ``<path>.new``, fsynced, made group read/write
    and renamed over *path*; the directory is then fsynced so the rename is
    durable.  On any failure the temporary file is removed, *path* keeps its
    previous content and :class:`ConfigSaveError` is raised.  When *sync* is
    true a full ``os.sync()`` follows the commit.

    Text is encoded as UTF-8 with ``surrogateescape`` so undecodable bytes
    read by :meth:`ConfigStore.load` are written back unchanged.
    """
    path = Path(path)
    tmp = temp_path_for(path)
    directory = path.parent

    try:
        with _open_directory(directory) as dir_fd:
            with tmp.open("w", encoding="utf-8", errors="surrogateescape", newline="\n") as fh:
                write_store(store, fh)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp, FILE_MODE)
            os.replace(tmp, path)
            if dir_fd is not None:
                try:
                    os.fsync(dir_fd)
                except OSError as exc:
                    logger.warning("unable to fsync dir %s: %s", directory, exc)
    except Exception as exc:
        logger.error("unable to save config %s: %s", path, exc)
        _discard(tmp)
        raise ConfigSaveError(f"unable to save {path}: {exc}") from exc
    except BaseException:
        _discard(tmp)
        raise

    if sync and hasattr(os, "sync"):
        os.sync()
