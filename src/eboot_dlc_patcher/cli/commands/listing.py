"""list-dlc: print DLC metadata (entitlement label, status, key) from PKGs."""

from __future__ import annotations

import os

from ...lib._util.logging_utils import _log_debug
from ...lib.backend import Backend, ParseResult
from ...lib.dispatcher import ParsedInvocation
from ...lib.schema import Arity, OperationSpec, OptionSpec, ValueKind, absolute_paths
from ._completers import complete_packages

OPERATION = OperationSpec(
    name="list-dlc",
    description="Print DLC metadata extracted from one or more PKGs",
    options=(
        OptionSpec(
            name="dlc",
            aliases=("--dlc", "-d"),
            kind=ValueKind.FILE_LIST,
            arity=Arity.ONE_OR_MORE,
            required=True,
            description="PKG(s) to inspect",
        ),
    ),
)

COMPLETERS = {"dlc": complete_packages}


def format_result(result: ParseResult) -> str:
    """One output line: the encoded metadata, or ``<file name>: parse failed``."""
    if result.ok:
        return result.info.to_encoded_string()
    return f"{os.path.basename(result.pkg_path)}: parse failed"


def cmd_list_dlc(pkg_paths: list[str], backend: Backend) -> list[ParseResult]:
    print(f"[INFO] Parsed {len(pkg_paths)} DLC(s)")
    print("> Listing metadata")
    print()

    results = []
    for pkg in pkg_paths:
        result = backend.parse(pkg)
        if not result.ok:
            _log_debug(f"list-dlc: {pkg}: {result.error}")
        print(format_result(result))
        results.append(result)
    return results


def dispatch(invocation: ParsedInvocation, backend: Backend) -> bool:
    """Handle the list-dlc operation.  Returns True if handled."""
    if invocation.name != OPERATION.name:
        return False
    cmd_list_dlc(absolute_paths(invocation["dlc"]), backend)
    return True
