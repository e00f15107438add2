"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from stockledger.domain.exceptions import ValidationError
from stockledger.infrastructure.config import DEFAULT_DATA_DIR, load_settings


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings({})

        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.max_attempts == 5
        assert settings.low_stock_threshold == 4
        assert settings.default_reorder_level == 5

    def test_overrides(self, tmp_path):
        settings = load_settings(
            {
                "STOCKLEDGER_DATA_DIR": str(tmp_path),
                "STOCKLEDGER_MAX_ATTEMPTS": "9",
                "STOCKLEDGER_LOW_STOCK_THRESHOLD": "2",
                "STOCKLEDGER_DEFAULT_REORDER_LEVEL": "0",
            }
        )

        assert settings.data_dir == Path(tmp_path)
        assert settings.max_attempts == 9
        assert settings.low_stock_threshold == 2
        assert settings.default_reorder_level == 0

    def test_blank_values_use_defaults(self):
        assert load_settings({"STOCKLEDGER_MAX_ATTEMPTS": "  "}).max_attempts == 5

    @pytest.mark.parametrize(
        "name,value",
        [
            ("STOCKLEDGER_MAX_ATTEMPTS", "0"),
            ("STOCKLEDGER_MAX_ATTEMPTS", "lots"),
            ("STOCKLEDGER_LOW_STOCK_THRESHOLD", "-1"),
        ],
    )
    def test_invalid_values(self, name, value):
        with pytest.raises(ValidationError, match=name):
            load_settings({name: value})
