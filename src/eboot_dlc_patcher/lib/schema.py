"""Declarative option and operation tables.

The CLI never checks flags by hand.  Every operation is described by an
``OperationSpec`` holding ``OptionSpec`` rows; the dispatcher turns those rows
into argparse actions, so adding an operation only means adding a table.

Terminology
-----------
- **Kind**: what a value is (file, list of files, directory, boolean flag).
- **Arity**: how many values an option accepts per invocation.
- **Canonical name**: the key an option's value is stored under in a
  ``ParsedInvocation``.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class SchemaDefinitionError(ValueError):
    """Raised when an option or operation table is internally inconsistent."""


class ValueKind(Enum):
    FILE = "file"
    FILE_LIST = "file-list"
    DIRECTORY = "directory"
    FLAG = "flag"


class Arity(Enum):
    EXACTLY_ONE = "exactly-one"
    ONE_OR_MORE = "one-or-more"
    ZERO_OR_ONE = "zero-or-one"


# Kind -> arities it may be declared with
_ALLOWED_ARITY: dict[ValueKind, tuple[Arity, ...]] = {
    ValueKind.FILE: (Arity.EXACTLY_ONE, Arity.ZERO_OR_ONE),
    ValueKind.FILE_LIST: (Arity.ONE_OR_MORE,),
    ValueKind.DIRECTORY: (Arity.EXACTLY_ONE, Arity.ZERO_OR_ONE),
    ValueKind.FLAG: (Arity.ZERO_OR_ONE,),
}

_TRUE_WORDS = frozenset({"true", "yes", "1"})
_FALSE_WORDS = frozenset({"false", "no", "0"})


def parse_bool(text: str) -> bool:
    """Interpret an explicit flag value such as ``true`` or ``no``."""
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got '{text}'")


@dataclass(frozen=True)
class OptionSpec:
    """One accepted flag of an operation."""

    name: str
    aliases: tuple[str, ...]
    kind: ValueKind
    arity: Arity
    required: bool = False
    default: Any = None
    description: str = ""
    # DIRECTORY only: False for locations the collaborator creates (output dirs)
    must_exist: bool = True

    def __post_init__(self) -> None:
        if not self.aliases:
            raise SchemaDefinitionError(f"option '{self.name}' declares no aliases")
        for alias in self.aliases:
            if not alias.startswith("-"):
                raise SchemaDefinitionError(
                    f"option '{self.name}': alias '{alias}' must start with '-'"
                )
        if len(set(self.aliases)) != len(self.aliases):
            raise SchemaDefinitionError(f"option '{self.name}' repeats an alias")
        if self.arity not in _ALLOWED_ARITY[self.kind]:
            raise SchemaDefinitionError(
                f"option '{self.name}': kind {self.kind.value} cannot have arity {self.arity.value}"
            )
        if self.required and self.default is not None:
            raise SchemaDefinitionError(f"required option '{self.name}' cannot have a default")

    @property
    def dest(self) -> str:
        """Attribute name used on the argparse namespace."""
        return self.name.replace("-", "_")

    @property
    def metavar(self) -> str:
        if self.kind is ValueKind.FLAG:
            return "BOOL"
        if self.kind is ValueKind.DIRECTORY:
            return "DIR"
        return "PATH"

    def convert(self, text: str) -> Path | str | bool:
        """Validate one raw token against this option's kind.

        Directories the collaborator creates (``must_exist=False``) come back
        as the original token, untouched; other paths come back as ``Path``.
        Raises ``argparse.ArgumentTypeError`` so argparse reports the failure
        against the offending option.
        """
        if self.kind is ValueKind.FLAG:
            return parse_bool(text)

        if not text.strip():
            raise argparse.ArgumentTypeError("empty path")

        if self.kind is ValueKind.DIRECTORY and not self.must_exist:
            target = Path(text)
            if target.exists() and not target.is_dir():
                raise argparse.ArgumentTypeError(f"not a directory: '{text}'")
            return text

        path = Path(text).expanduser()
        if self.kind in (ValueKind.FILE, ValueKind.FILE_LIST):
            if not path.exists():
                raise argparse.ArgumentTypeError(f"file does not exist: '{text}'")
            if not path.is_file():
                raise argparse.ArgumentTypeError(f"not a file: '{text}'")
            return path

        if not path.exists():
            raise argparse.ArgumentTypeError(f"directory does not exist: '{text}'")
        if not path.is_dir():
            raise argparse.ArgumentTypeError(f"not a directory: '{text}'")
        return path


@dataclass(frozen=True)
class OperationSpec:
    """A named operation and the options it accepts."""

    name: str
    description: str
    options: tuple[OptionSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        names = [o.name for o in self.options]
        if len(set(names)) != len(names):
            raise SchemaDefinitionError(f"operation '{self.name}' repeats an option name")
        aliases = [a for o in self.options for a in o.aliases]
        if len(set(aliases)) != len(aliases):
            raise SchemaDefinitionError(f"operation '{self.name}' repeats an option alias")

    def option(self, name: str) -> OptionSpec:
        for opt in self.options:
            if opt.name == name:
                return opt
        raise KeyError(name)


class OperationRegistry:
    """Ordered set of operations, keyed by unique name."""

    def __init__(self, operations: Iterable[OperationSpec] = ()) -> None:
        self._operations: dict[str, OperationSpec] = {}
        for op in operations:
            self.add(op)

    def add(self, operation: OperationSpec) -> None:
        if operation.name in self._operations:
            raise SchemaDefinitionError(f"operation '{operation.name}' is already registered")
        self._operations[operation.name] = operation

    def get(self, name: str) -> OperationSpec | None:
        return self._operations.get(name)

    def names(self) -> list[str]:
        return list(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[OperationSpec]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)


def absolute_paths(paths: Iterable[os.PathLike[str] | str]) -> list[str]:
    """Return absolute path strings, keeping order and duplicates."""
    return [os.path.abspath(p) for p in paths]
