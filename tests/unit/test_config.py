"""
Unit tests for environment-driven settings.
"""

import importlib

import pytest

from sales_dashboard.core import config
from sales_dashboard.core.dependencies import get_query_builder
from sales_dashboard.query import CombineMode


@pytest.fixture
def reload_config(monkeypatch):
    """Reload the config module under a patched environment, then restore it"""
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


class TestSearchAgeCombineMode:
    """Test SEARCH_AGE_COMBINE_MODE parsing"""

    @pytest.mark.parametrize("value, expected", [("or", "or"), ("AND", "and"), (" and ", "and")])
    def test_accepted_values(self, monkeypatch, reload_config, value, expected):
        monkeypatch.setenv("SEARCH_AGE_COMBINE_MODE", value)
        assert reload_config().SEARCH_AGE_COMBINE_MODE == expected

    def test_unknown_value_fails_at_import(self, monkeypatch, reload_config):
        monkeypatch.setenv("SEARCH_AGE_COMBINE_MODE", "union")
        with pytest.raises(ValueError, match="SEARCH_AGE_COMBINE_MODE"):
            reload_config()

    def test_query_builder_uses_configured_mode(self, monkeypatch, reload_config):
        monkeypatch.setenv("SEARCH_AGE_COMBINE_MODE", "and")
        reload_config()
        assert get_query_builder().search_age_mode == CombineMode.AND
