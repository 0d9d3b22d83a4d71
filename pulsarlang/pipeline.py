"""Backend pipeline: a chain of component transforms followed by a target."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, TextIO


class OutputKind(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"
    FILE = "file"


@dataclass(frozen=True)
class OutputFile:
    """Where a target writes its output."""

    kind: OutputKind
    path: Path | None = None

    def __post_init__(self) -> None:
        if (self.kind is OutputKind.FILE) != (self.path is not None):
            raise ValueError("a path is given exactly for file outputs")

    @classmethod
    def stdout(cls) -> OutputFile:
        return cls(OutputKind.STDOUT)

    @classmethod
    def stderr(cls) -> OutputFile:
        return cls(OutputKind.STDERR)

    @classmethod
    def file(cls, path: str | Path) -> OutputFile:
        return cls(OutputKind.FILE, Path(path))

    @contextmanager
    def open(self) -> Iterator[TextIO]:
        """A text stream for this output; only files are closed afterwards."""
        if self.kind is OutputKind.STDOUT:
            yield sys.stdout
        elif self.kind is OutputKind.STDERR:
            yield sys.stderr
        else:
            assert self.path is not None
            with self.path.open("w", encoding="utf-8") as stream:
                yield stream


class Target(ABC):
    """Emits a component in some output form."""

    @abstractmethod
    def emit(self, comp: Any, pool: Any, output: OutputFile) -> None:
        ...


class Transform(ABC):
    """Produces a new component from an existing one."""

    @abstractmethod
    def apply(self, comp: Any, pool: Any, gen: Any) -> Any:
        ...


@dataclass
class Backend:
    """Runs every transform in order, then hands the result to the target."""

    target: Target | None = None
    transforms: list[Transform] = field(default_factory=list)

    def emit(self, comp: Any, pool: Any, gen: Any, output: OutputFile) -> None:
        for transform in self.transforms:
            comp = transform.apply(comp, pool, gen)
        if self.target is None:
            raise RuntimeError("no target specified")
        self.target.emit(comp, pool, output)


class BackendBuilder:
    """Fluent construction of a Backend."""

    def __init__(self) -> None:
        self._backend = Backend()

    def target(self, target: Target) -> BackendBuilder:
        self._backend.target = target
        return self

    def through(self, transform: Transform) -> BackendBuilder:
        self._backend.transforms.append(transform)
        return self

    def build(self) -> Backend:
        return self._backend