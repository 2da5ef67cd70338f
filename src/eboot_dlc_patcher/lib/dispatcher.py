"""Turn raw argv tokens into exactly one validated ``ParsedInvocation``.

The argparse tree is generated from an ``OperationRegistry``: one root parser
(``--help``/``--version`` and the operation list) plus one sub-parser per
operation.  Every rejection goes through ``_SchemaParser.error`` and is raised
as a ``SchemaError`` instead of exiting, so callers decide how to report it.
"""

from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ._util.logging_utils import _log_debug
from .schema import OperationRegistry, OperationSpec, OptionSpec, ValueKind

# Placeholder for "option not given"; lets single-use actions spot repeats
_ABSENT = object()


class SchemaError(Exception):
    """Input rejected by the argument schema.  No handler has run."""

    def __init__(self, message: str, *, prog: str, usage: str) -> None:
        super().__init__(message)
        self.message = message
        self.prog = prog
        self.usage = usage

    def format(self) -> str:
        """Render as ``usage`` followed by ``<prog>: error: <message>``."""
        return f"{self.usage}{self.prog}: error: {self.message}\n"


class UnknownOperationError(SchemaError):
    """The first token names no registered operation."""

    def __init__(self, name: str, known: Sequence[str], *, prog: str, usage: str) -> None:
        choices = ", ".join(known)
        super().__init__(
            f"unknown operation '{name}' (choose from {choices})", prog=prog, usage=usage
        )
        self.name = name


class NoOperationError(Exception):
    """No operation was named at all.

    Kept apart from ``SchemaError`` so callers can fall back to another
    interaction mode instead of reporting a mistake.
    """


@dataclass(frozen=True)
class ParsedInvocation:
    """A selected operation plus its resolved option values."""

    operation: OperationSpec
    values: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.operation.name

    def __getitem__(self, option_name: str) -> Any:
        return self.values[option_name]


class _SchemaParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise SchemaError(message, prog=self.prog, usage=self.format_usage())


class _SingleUseAction(argparse.Action):
    """Store one value and reject a second occurrence of the option."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, _ABSENT) is not _ABSENT:
            raise argparse.ArgumentError(self, "may only be given once")
        setattr(namespace, self.dest, values)


def _add_option(parser: argparse.ArgumentParser, option: OptionSpec) -> argparse.Action:
    kwargs: dict[str, Any] = {
        "dest": option.dest,
        "required": option.required,
        "help": option.description,
        "metavar": option.metavar,
        "type": option.convert,
    }
    if option.kind is ValueKind.FILE_LIST:
        kwargs.update(action="extend", nargs="+", default=None)
    elif option.kind is ValueKind.FLAG:
        # "-f" alone means true; "-f false" is also accepted
        kwargs.update(action=_SingleUseAction, nargs="?", const=True, default=_ABSENT)
    else:
        kwargs.update(action=_SingleUseAction, default=_ABSENT)
    return parser.add_argument(*option.aliases, **kwargs)


class Dispatcher:
    """Argparse tree built from an operation registry."""

    def __init__(
        self,
        registry: OperationRegistry,
        *,
        prog: str,
        description: str = "",
        version: str | None = None,
    ) -> None:
        self.registry = registry
        self.parser = _SchemaParser(
            prog=prog,
            description=description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            allow_abbrev=False,
        )
        if version is not None:
            self.parser.add_argument("--version", action="version", version=f"{prog} {version}")
        sub = self.parser.add_subparsers(dest="operation", metavar="OPERATION", title="operations")
        self._subparsers: dict[str, argparse.ArgumentParser] = {}
        # Per-option actions, exposed so shell completion can attach completers
        self.actions: dict[tuple[str, str], argparse.Action] = {}
        for op in registry:
            op_parser = sub.add_parser(
                op.name, help=op.description, description=op.description, allow_abbrev=False
            )
            for option in op.options:
                self.actions[(op.name, option.name)] = _add_option(op_parser, option)
            self._subparsers[op.name] = op_parser

    def parse(self, argv: Sequence[str]) -> ParsedInvocation:
        """Validate *argv* (program name excluded) against the registry.

        Raises ``NoOperationError`` when no operation is named,
        ``UnknownOperationError`` for an unregistered name and ``SchemaError``
        for any option problem.  ``--help``/``--version`` exit via argparse.
        """
        tokens = list(argv)
        if not tokens or tokens[0].startswith("-"):
            # Only root flags are legal here; anything else is an unmatched token
            self.parser.parse_args(tokens)
            raise NoOperationError()

        name, rest = tokens[0], tokens[1:]
        op = self.registry.get(name)
        if op is None:
            raise UnknownOperationError(
                name, self.registry.names(), prog=self.parser.prog, usage=self.parser.format_usage()
            )

        namespace = self._subparsers[name].parse_args(rest)
        values: dict[str, Any] = {}
        for option in op.options:
            value = getattr(namespace, option.dest, _ABSENT)
            if value is _ABSENT or value is None:
                value = option.default
                if option.kind is ValueKind.FLAG and value is None:
                    value = False
            values[option.name] = value

        _log_debug(f"dispatch: operation={name} options={sorted(k for k, v in values.items() if v)}")
        return ParsedInvocation(operation=op, values=MappingProxyType(values))
