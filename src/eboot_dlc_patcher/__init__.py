"""eboot_dlc_patcher package.

Modules:
- eboot_dlc_patcher.cli: CLI entry point package (eboot-dlc-patcher)
- eboot_dlc_patcher.lib: Argument schema, dispatcher, collaborator backend
- eboot_dlc_patcher.lib.core: Configuration, paths, version
- eboot_dlc_patcher.lib._util: Internal helpers (ANSI, logging)
"""

__all__ = [
    "cli",
    "lib",
]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("eboot-dlc-patcher")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
