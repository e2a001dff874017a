import logging
import os

import pytest

from bfsg_audit.utils.config import config_manager
from bfsg_audit.utils.logging_helper import set_package_level


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Run every test without BFSG_* environment overrides or loaded config files."""
    for name in list(os.environ):
        if name.startswith("BFSG_"):
            monkeypatch.delenv(name)

    saved = config_manager.user_config
    config_manager.user_config = {}
    yield
    config_manager.user_config = saved
    set_package_level(logging.INFO)


@pytest.fixture
def accessible_html():
    """A small page that passes every check."""
    return (
        '<html lang="en"><head><title>Welcome</title></head><body>'
        '<a href="#main">Skip to main content</a>'
        '<main id="main"><h1>Accessible page</h1><p>Welcome to our site.</p></main>'
        "</body></html>"
    )


@pytest.fixture
def inaccessible_html():
    """A page with an image, form and link problem."""
    return (
        '<html lang="en"><body>'
        '<a href="#main">Skip to main content</a>'
        '<main id="main"><h1>Shop</h1>'
        '<img src="product.png">'
        '<form aria-label="Search"><input type="text" name="q"></form>'
        '<a href="/more">Read more</a>'
        "</main></body></html>"
    )
