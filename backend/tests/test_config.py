"""
Tests for engine settings.
"""

import pytest
from pydantic import ValidationError

from mixlab.config import Settings
from mixlab.services.blend_normalizer import CapTable


def test_defaults(monkeypatch):
    for name in ("MINT_CAP_PERCENT", "STRONG_ITEM_CAP_PERCENT", "DEFAULT_TOTAL_GRAMS",
                 "RENORMALIZE_REPEAT_GRAMS", "CATALOG_PATH", "STRONG_ITEM_ID"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()
    assert settings.MINT_CAP_PERCENT == 25
    assert settings.STRONG_ITEM_CAP_PERCENT == 10
    assert settings.STRONG_ITEM_ID == "ds1"
    assert settings.DEFAULT_TOTAL_GRAMS == 20
    assert settings.RENORMALIZE_REPEAT_GRAMS is False
    assert settings.CATALOG_PATH is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MINT_CAP_PERCENT", "30")
    monkeypatch.setenv("RENORMALIZE_REPEAT_GRAMS", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()
    assert settings.MINT_CAP_PERCENT == 30
    assert settings.RENORMALIZE_REPEAT_GRAMS is True
    assert settings.LOG_LEVEL == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="LOUD")


def test_catalog_path_must_be_json():
    with pytest.raises(ValidationError):
        Settings(CATALOG_PATH="catalog.yaml")
    assert Settings(CATALOG_PATH="catalog.json").CATALOG_PATH == "catalog.json"


def test_cap_out_of_range():
    with pytest.raises(ValidationError):
        Settings(MINT_CAP_PERCENT=0)


def test_cap_table_from_settings():
    caps = CapTable.from_settings(Settings(MINT_CAP_PERCENT=20, STRONG_ITEM_CAP_PERCENT=5))
    assert caps.categories == {"mint": 20}
    assert caps.items == {"ds1": 5}
