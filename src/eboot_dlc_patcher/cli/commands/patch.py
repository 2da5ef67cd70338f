"""patch: make executables resolve DLC look-ups through the loader module."""

from __future__ import annotations

from ...lib.backend import Backend
from ...lib.core.config import default_output_dir
from ...lib.dispatcher import ParsedInvocation
from ...lib.schema import Arity, OperationSpec, OptionSpec, ValueKind, absolute_paths
from ._completers import complete_directories, complete_executables, complete_packages

OPERATION = OperationSpec(
    name="patch",
    description="Patch executable(s) so they resolve DLC look-ups via dlcldr.prx",
    options=(
        OptionSpec(
            name="exec",
            aliases=("--exec", "-e"),
            kind=ValueKind.FILE_LIST,
            arity=Arity.ONE_OR_MORE,
            required=True,
            description="Path(s) to the ELF(s) to patch",
        ),
        OptionSpec(
            name="dlc",
            aliases=("--dlc", "-d"),
            kind=ValueKind.FILE_LIST,
            arity=Arity.ONE_OR_MORE,
            required=True,
            description="Path(s) to DLC PKG(s)",
        ),
        OptionSpec(
            name="output-dir",
            aliases=("--output-dir", "-o"),
            kind=ValueKind.DIRECTORY,
            arity=Arity.ZERO_OR_ONE,
            description="Output directory for patched assets (default: ./eboot_patcher_output)",
            must_exist=False,
        ),
        OptionSpec(
            name="force-in-eboot",
            aliases=("--force-in-eboot", "-f"),
            kind=ValueKind.FLAG,
            arity=Arity.ZERO_OR_ONE,
            default=False,
            description="Force the in-EBOOT loader variant (advanced)",
        ),
    ),
)

COMPLETERS = {
    "exec": complete_executables,
    "dlc": complete_packages,
    "output-dir": complete_directories,
}


def cmd_patch(
    exec_paths: list[str],
    dlc_paths: list[str],
    output_dir: str | None,
    force_in_eboot: bool,
    backend: Backend,
) -> None:
    """Print the patch summary, then hand off to the patch collaborator."""
    output = output_dir if output_dir is not None else str(default_output_dir())

    print(f"[INFO] Parsed {len(dlc_paths)} DLC(s)")
    print(f"> Patch {len(exec_paths)} executable(s) with {len(dlc_paths)} DLC(s)")
    print()

    backend.run_patch(exec_paths, dlc_paths, output, force_in_eboot)


def dispatch(invocation: ParsedInvocation, backend: Backend) -> bool:
    """Handle the patch operation.  Returns True if handled."""
    if invocation.name != OPERATION.name:
        return False
    cmd_patch(
        absolute_paths(invocation["exec"]),
        absolute_paths(invocation["dlc"]),
        invocation["output-dir"],
        bool(invocation["force-in-eboot"]),
        backend,
    )
    return True
