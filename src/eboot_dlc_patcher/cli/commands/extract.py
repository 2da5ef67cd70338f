"""extract-dlc: unpack extra-data DLCs into dlcXX folders under Image0."""

from __future__ import annotations

import os

from ...lib.backend import Backend
from ...lib.dispatcher import ParsedInvocation
from ...lib.schema import Arity, OperationSpec, OptionSpec, ValueKind, absolute_paths
from ._completers import complete_directories, complete_packages

OPERATION = OperationSpec(
    name="extract-dlc",
    description="Extract extra-data DLCs into dlcXX folders under Image0",
    options=(
        OptionSpec(
            name="dlc",
            aliases=("--dlc", "-d"),
            kind=ValueKind.FILE_LIST,
            arity=Arity.ONE_OR_MORE,
            required=True,
            description="DLC PKGs containing extra data",
        ),
        OptionSpec(
            name="image0",
            aliases=("--image0", "-i"),
            kind=ValueKind.DIRECTORY,
            arity=Arity.EXACTLY_ONE,
            required=True,
            description="Update's Image0 directory where dlcXX folders will be created",
        ),
    ),
)

COMPLETERS = {
    "dlc": complete_packages,
    "image0": complete_directories,
}


def cmd_extract(image0_dir: str, dlc_paths: list[str], backend: Backend) -> None:
    print(f"[INFO] Parsed {len(dlc_paths)} DLC(s)")
    print(f"> Extract {len(dlc_paths)} DLC(s) into Image0: {image0_dir}")
    print()

    backend.run_extract(image0_dir, dlc_paths)


def dispatch(invocation: ParsedInvocation, backend: Backend) -> bool:
    """Handle the extract-dlc operation.  Returns True if handled."""
    if invocation.name != OPERATION.name:
        return False
    cmd_extract(
        os.path.abspath(invocation["image0"]),
        absolute_paths(invocation["dlc"]),
        backend,
    )
    return True
