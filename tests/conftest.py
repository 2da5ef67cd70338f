import pytest


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep the debug log and config lookups inside a temp dir."""
    monkeypatch.setenv("EBOOT_DLC_PATCHER_STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("EBOOT_DLC_PATCHER_CONFIG_FILE", str(tmp_path / "missing-config.yml"))
    monkeypatch.delenv("EBOOT_DLC_PATCHER_BACKEND", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
