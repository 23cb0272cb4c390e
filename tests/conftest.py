"""
Shared fixtures.

Every test starts from package defaults: fresh configuration, views,
validation factory and JavaScript validator factory.
"""

import pytest

import jsvalidation.factory as js_factory
from jsvalidation.core.config import Config, set_config
from jsvalidation.core.session import Session
from jsvalidation.engine import template
from jsvalidation.security.encrypter import Encrypter
from jsvalidation.validation.factory import set_validation_factory


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Isolate module-level defaults between tests."""
    set_config(Config(load_env=False))
    set_validation_factory(None)
    monkeypatch.setattr(template, "_default_factory", None)
    monkeypatch.setattr(js_factory, "_default_factory", None)
    yield
    set_validation_factory(None)


@pytest.fixture
def session():
    """Session with a known CSRF token."""
    return Session("session-id", {"_token": "csrf-token"})


@pytest.fixture
def encrypter():
    return Encrypter("test-secret")


@pytest.fixture
def factory(session):
    """JavaScript validator factory bound to a session, without encryption."""
    return js_factory.JsValidatorFactory(session=session)
