from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep the developer's own config file out of the tests.
    monkeypatch.delenv("MBBACKLIGHT_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def sysfs(tmp_path: Path):
    """Return a factory creating kbd/ and screen/ device dirs under tmp_path."""

    def _make(brightness: str = "50\n", max_brightness: str = "100\n") -> Path:
        root = tmp_path / "sys"
        for name in ("kbd", "screen"):
            d = root / name
            d.mkdir(parents=True, exist_ok=True)
            (d / "brightness").write_text(brightness, encoding="utf-8")
            (d / "max_brightness").write_text(max_brightness, encoding="utf-8")
        return root

    return _make
