import os
import sys
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .paths import APP_NAME, config_root

# Folder created under the working directory when patch gets no --output-dir
OUTPUT_DIR_NAME = "eboot_patcher_output"

# ---------- Global config ----------


def global_config_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for global config.

    - If EBOOT_DLC_PATCHER_CONFIG_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) config_root()/config.yml
        2) sys.prefix/etc/eboot-dlc-patcher/config.yml
        3) /etc/eboot-dlc-patcher/config.yml
    """
    env_file = os.environ.get("EBOOT_DLC_PATCHER_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]

    user_cfg = config_root() / "config.yml"
    sp_cfg = Path(sys.prefix) / "etc" / APP_NAME / "config.yml"
    etc_cfg = Path("/etc") / APP_NAME / "config.yml"
    return [user_cfg, sp_cfg, etc_cfg]


def global_config_path() -> Path:
    """Global config file path (first existing search path wins).

    An explicit EBOOT_DLC_PATCHER_CONFIG_FILE is returned even if missing to
    make intent visible to the user.  If nothing exists, the last candidate is
    returned.
    """
    candidates = global_config_search_paths()
    if len(candidates) == 1:
        return candidates[0]

    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[-1]


def load_global_config() -> dict[str, Any]:
    cfg_path = global_config_path()
    if not cfg_path.is_file():
        return {}
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    return data if isinstance(data, dict) else {}


def get_global_section(key: str) -> dict[str, Any]:
    """Return a top-level section from the global config, defaulting to ``{}``.

    If the value under *key* is not a dict (e.g. the user wrote ``backend: "oops"``),
    returns ``{}`` so callers can always use ``.get()``.
    """
    value = load_global_config().get(key, {})
    if not isinstance(value, dict):
        return {}
    return value or {}


# ---------- Resolved settings ----------


def default_output_dir() -> Path:
    """Output directory used by ``patch`` when none is given."""
    return Path(os.getcwd()) / OUTPUT_DIR_NAME


def backend_module() -> str | None:
    """Module providing the patch/extract/parse collaborators.

    Order: EBOOT_DLC_PATCHER_BACKEND, then ``backend.module`` in config.yml.
    """
    env = os.environ.get("EBOOT_DLC_PATCHER_BACKEND")
    if env:
        return env.strip()
    value = get_global_section("backend").get("module")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
