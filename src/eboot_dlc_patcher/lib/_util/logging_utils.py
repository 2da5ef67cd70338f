"""Utility functions for logging."""


def _log_debug(message: str) -> None:
    """Append a simple debug line to the eboot-dlc-patcher log.

    Writes timestamped lines to ``state_root()/eboot-dlc-patcher.log``.
    IO errors are ignored so a read-only or missing state directory never
    changes what a command prints or returns.
    """
    try:
        import time

        from ..core.paths import state_root

        log_path = state_root() / "eboot-dlc-patcher.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {message}\n")
    except OSError:
        pass
