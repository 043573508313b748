# SPDX-License-Identifier: MIT
"""Task inputs with configurable path sensitivity.

A task's cache key includes a fingerprint of each registered input set.
How much of a file's identity enters the fingerprint depends on the
set's PathSensitivity:

    ABSOLUTE  absolute path and content
    RELATIVE  path relative to a base directory and content
    NONE      content only; moving or renaming a file does not change it
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from pathlib import Path

from sysinc.core.errors import MissingInputError

logger = logging.getLogger(__name__)

FileSource = Iterable[Path | str] | Callable[[], Iterable[Path | str]]


class PathSensitivity(Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    NONE = "none"


def file_digest(path: Path) -> str:
    """SHA-256 of a file's content."""
    if not path.is_file():
        raise MissingInputError(path)
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


class InputFiles:
    """A set of input files registered on a task.

    The file list may be given as a zero-argument callable, in which case
    it is only evaluated when the files or the fingerprint are requested.

    Attributes:
        sensitivity: How paths contribute to the fingerprint.
        base_dir: Base directory for RELATIVE sensitivity.
    """

    def __init__(
        self,
        files: FileSource,
        *,
        sensitivity: PathSensitivity = PathSensitivity.ABSOLUTE,
        base_dir: Path | str | None = None,
    ) -> None:
        if sensitivity is PathSensitivity.RELATIVE and base_dir is None:
            raise ValueError("RELATIVE path sensitivity requires a base_dir")
        self._files = files
        self.sensitivity = sensitivity
        self.base_dir = Path(base_dir) if base_dir is not None else None

    @property
    def files(self) -> list[Path]:
        """The files of this set (evaluates a lazy source)."""
        source = self._files() if callable(self._files) else self._files
        return [Path(f) for f in source]

    def fingerprint(self) -> str:
        """Fingerprint of this input set, as a hex digest."""
        entries: list[str] = []
        for path in self.files:
            content = file_digest(path)
            if self.sensitivity is PathSensitivity.NONE:
                entries.append(content)
            elif self.sensitivity is PathSensitivity.RELATIVE:
                assert self.base_dir is not None
                rel = Path(path).absolute().relative_to(self.base_dir.absolute())
                entries.append(f"{rel.as_posix()}:{content}")
            else:
                entries.append(f"{Path(path).absolute().as_posix()}:{content}")

        if self.sensitivity is PathSensitivity.NONE:
            entries.sort()

        h = hashlib.sha256(self.sensitivity.value.encode())
        for entry in entries:
            h.update(b"\0")
            h.update(entry.encode())
        return h.hexdigest()

    def __repr__(self) -> str:
        return f"InputFiles(sensitivity={self.sensitivity.name})"


class TaskInputs:
    """The input file sets registered on a task."""

    def __init__(self) -> None:
        self._sets: list[InputFiles] = []

    def files(
        self,
        files: FileSource,
        *,
        sensitivity: PathSensitivity = PathSensitivity.ABSOLUTE,
        base_dir: Path | str | None = None,
    ) -> InputFiles:
        """Register an input file set and return it."""
        input_files = InputFiles(files, sensitivity=sensitivity, base_dir=base_dir)
        self._sets.append(input_files)
        logger.debug("Registered %r", input_files)
        return input_files

    def fingerprints(self) -> list[str]:
        return [s.fingerprint() for s in self._sets]

    def __iter__(self) -> Iterator[InputFiles]:
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)
