# SPDX-FileCopyrightText: 2026 Jiri Vyskocil
# SPDX-License-Identifier: Apache-2.0

"""Version information for eboot-dlc-patcher, used by ``--version``."""


def get_version() -> str:
    """Return the installed package version, or ``"unknown"``."""
    try:
        from eboot_dlc_patcher import __version__

        return __version__
    except (ImportError, AttributeError):
        return "unknown"
