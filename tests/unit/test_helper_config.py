"""Tests for the environment configuration helper."""

import logging
import os
from unittest.mock import patch

import pytest

from pager.helper.HelperConfig import HelperConfig


@pytest.fixture
def config() -> HelperConfig:
    return HelperConfig(logger=logging.getLogger("pager.tests"))


class TestHelperConfig:

    def test_string_value(self, config):
        with patch.dict(os.environ, {"CURSOR_ENGINE": "  salesforce "}):
            assert config.get_string_val("cursor_engine") == "salesforce"

    def test_missing_required_value(self, config):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="CURSOR_ENGINE"):
                config.get_string_val("CURSOR_ENGINE")

    def test_empty_string_counts_as_unset(self, config):
        with patch.dict(os.environ, {"CURSOR_SALESFORCE_ACCESS_TOKEN": ""}):
            assert config.get_string_val("CURSOR_SALESFORCE_ACCESS_TOKEN", default="") == ""
            assert config.get_string_val("CURSOR_SALESFORCE_ACCESS_TOKEN", default="fallback") == "fallback"

    def test_number_values(self, config):
        with patch.dict(os.environ, {"CURSOR_TIMEOUT": "12.5", "BROWSE_MAX_PAGES": "3"}):
            assert config.get_number_val("CURSOR_TIMEOUT") == 12.5
            assert config.get_number_val("BROWSE_MAX_PAGES") == 3

    def test_invalid_number(self, config):
        with patch.dict(os.environ, {"BROWSE_MAX_PAGES": "many"}):
            with pytest.raises(ValueError, match="not a valid number"):
                config.get_number_val("BROWSE_MAX_PAGES")

    def test_bool_value(self, config):
        with patch.dict(os.environ, {"FLAG_A": "Yes", "FLAG_B": "off"}):
            assert config.get_bool_val("FLAG_A") is True
            assert config.get_bool_val("FLAG_B") is False

