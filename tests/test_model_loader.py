from __future__ import annotations

from pathlib import Path

import pytest

from akkoctl.core.errors import ModelValidationError
from akkoctl.core.model_loader import load_models


def _write_model(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def _isolated_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))


def test_load_packaged_models() -> None:
    loaded = load_models()
    assert set(loaded.models) == {"mod007b", "akko24g_wireless"}
    mod = loaded.models["mod007b"]
    assert (mod.vendor_id, mod.product_id) == (0x3151, 0x5009)
    assert mod.name == "MOD007B"
    wireless = loaded.models["akko24g_wireless"]
    assert (wireless.vendor_id, wireless.product_id) == (0x3151, 0x4011)
    assert "akko24gwireless" in wireless.aliases
    assert loaded.warnings == ()


def test_user_model_adds_row(tmp_path: Path) -> None:
    _write_model(
        tmp_path / "data" / "akkoctl" / "models" / "mod001.yaml",
        """
id: mod001
name: MOD001
vendor_id: "0x3151"
product_id: "0x5010"
""",
    )
    loaded = load_models()
    assert loaded.models["mod001"].product_id == 0x5010


def test_user_model_overrides_packaged(tmp_path: Path) -> None:
    _write_model(
        tmp_path / "cfg" / "akkoctl" / "models" / "override.yaml",
        """
id: mod007b
name: MOD007B (ISO)
vendor_id: "0x3151"
product_id: "0x5019"
""",
    )
    loaded = load_models()
    assert loaded.models["mod007b"].name == "MOD007B (ISO)"
    assert loaded.models["mod007b"].product_id == 0x5019
    assert any("overrides" in warning for warning in loaded.warnings)


def test_invalid_usb_id_rejected(tmp_path: Path) -> None:
    _write_model(
        tmp_path / "cfg" / "akkoctl" / "models" / "bad.yaml",
        """
id: bad
name: Bad
vendor_id: "3151"
product_id: "0x5009"
""",
    )
    with pytest.raises(ModelValidationError):
        load_models()


def test_zero_usb_id_rejected(tmp_path: Path) -> None:
    _write_model(
        tmp_path / "cfg" / "akkoctl" / "models" / "zero.yaml",
        """
id: zero
name: Zero
vendor_id: "0x0000"
product_id: "0x5009"
""",
    )
    with pytest.raises(ModelValidationError):
        load_models()


def test_missing_required_keys_rejected(tmp_path: Path) -> None:
    _write_model(
        tmp_path / "cfg" / "akkoctl" / "models" / "missing.yaml",
        """
id: missing
name: Missing
vendor_id: "0x3151"
""",
    )
    with pytest.raises(ModelValidationError):
        load_models()


def test_duplicate_yaml_keys_rejected(tmp_path: Path) -> None:
    _write_model(
        tmp_path / "cfg" / "akkoctl" / "models" / "dup.yaml",
        """
id: dup
name: Duplicate
vendor_id: "0x3151"
vendor_id: "0x3152"
product_id: "0x5009"
""",
    )
    with pytest.raises(ModelValidationError):
        load_models()
