"""Tests for centralized configuration (settings)."""

import importlib

import pytest

from policy_design.config import settings


def test_defaults_are_positive_integers():
    assert settings.DEFAULT_GRACE_PERIOD_DAYS == 30
    assert settings.DEFAULT_LIST_LIMIT > 0
    assert settings.MAX_LIST_LIMIT >= settings.DEFAULT_LIST_LIMIT


def test_product_family_default():
    assert settings.PRODUCT_FAMILY == "Insurance"


def test_int_helper_falls_back_on_bad_value(monkeypatch):
    monkeypatch.setenv("POLICY_DESIGN_TEST_INT", "not-a-number")
    assert settings._int("POLICY_DESIGN_TEST_INT", 7) == 7
    monkeypatch.setenv("POLICY_DESIGN_TEST_INT", "12")
    assert settings._int("POLICY_DESIGN_TEST_INT", 7) == 12


def test_str_helper_ignores_blank(monkeypatch):
    monkeypatch.setenv("POLICY_DESIGN_TEST_STR", "   ")
    assert settings._str("POLICY_DESIGN_TEST_STR", "fallback") == "fallback"


def test_get_gateway_path(monkeypatch):
    monkeypatch.delenv("POLICY_DESIGN_GATEWAY", raising=False)
    assert settings.get_gateway_path() is None
    monkeypatch.setenv("POLICY_DESIGN_GATEWAY", " crm.client:make_gateway ")
    assert settings.get_gateway_path() == "crm.client:make_gateway"


@pytest.fixture
def reload_settings(monkeypatch):
    yield
    monkeypatch.undo()
    importlib.reload(settings)


def test_module_constants_respect_env(monkeypatch, reload_settings):
    monkeypatch.setenv("POLICY_DESIGN_GRACE_PERIOD_DAYS", "15")
    monkeypatch.setenv("POLICY_DESIGN_LIST_LIMIT", "25")
    monkeypatch.setenv("POLICY_DESIGN_PRODUCT_FAMILY", "P&C")
    importlib.reload(settings)
    assert settings.DEFAULT_GRACE_PERIOD_DAYS == 15
    assert settings.DEFAULT_LIST_LIMIT == 25
    assert settings.PRODUCT_FAMILY == "P&C"
