#!/usr/bin/env python3

import sys
from collections.abc import Callable, Sequence

import argcomplete

from ..lib._util.ansi import red, supports_color as _supports_color
from ..lib._util.logging_utils import _log_debug
from ..lib.backend import Backend, BackendError, load_backend
from ..lib.core.version import get_version
from ..lib.dispatcher import Dispatcher, NoOperationError, SchemaError
from ..lib.schema import OperationRegistry
from .commands import extract, listing, patch

PROG = "eboot-dlc-patcher"
DESCRIPTION = "PS4-/PS5-EBOOT-DLC-Patcher – non-interactive CLI"

# Order here is the order shown by --help
_COMMAND_MODULES = (patch, extract, listing)

REGISTRY = OperationRegistry(mod.OPERATION for mod in _COMMAND_MODULES)


def build_dispatcher() -> Dispatcher:
    dispatcher = Dispatcher(REGISTRY, prog=PROG, description=DESCRIPTION, version=get_version())
    for mod in _COMMAND_MODULES:
        for option_name, completer in mod.COMPLETERS.items():
            action = dispatcher.actions[(mod.OPERATION.name, option_name)]
            action.completer = completer  # type: ignore[attr-defined]
    return dispatcher


def _report_error(text: str) -> None:
    """Write a diagnostic to stderr, coloring the ``error`` word when possible."""
    if _supports_color(sys.stderr):
        text = text.replace(": error: ", f": {red('error', True)}: ", 1)
    sys.stderr.write(text if text.endswith("\n") else text + "\n")


def main(
    argv: Sequence[str] | None = None,
    *,
    backend: Backend | None = None,
    fallback: Callable[[], int] | None = None,
) -> int:
    """Run one operation and return the process exit status.

    *fallback* is called when no operation is named (e.g. an interactive
    mode); without it the help text is shown and 2 is returned.
    """
    dispatcher = build_dispatcher()
    argcomplete.autocomplete(dispatcher.parser)

    tokens = sys.argv[1:] if argv is None else list(argv)
    try:
        invocation = dispatcher.parse(tokens)
    except NoOperationError:
        if fallback is not None:
            _log_debug("main: no operation given, using fallback")
            return fallback()
        dispatcher.parser.print_help(sys.stderr)
        return 2
    except SchemaError as e:
        _log_debug(f"main: rejected {tokens!r}: {e.message}")
        _report_error(e.format())
        return 2

    if backend is None:
        try:
            backend = load_backend()
        except BackendError as e:
            _report_error(f"{PROG}: error: {e}")
            return 1

    for mod in _COMMAND_MODULES:
        if mod.dispatch(invocation, backend):
            return 0
    raise RuntimeError(f"No handler registered for operation '{invocation.name}'")


if __name__ == "__main__":
    sys.exit(main())
