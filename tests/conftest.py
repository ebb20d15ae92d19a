from __future__ import annotations

import logging

import pytest

from evstate.config.settings import get_settings
from evstate.domain.transitions import TransitionTable


@pytest.fixture()
def publish_table() -> TransitionTable:
    """Tabela editorial com chaves str (mesma forma do README original)."""
    return {
        "draft": ["inReview"],
        "inReview": ["changesNeeded", "approved"],
        "changesNeeded": ["inReview", "approved"],
        "approved": ["draft", "scheduled", "published"],
        "scheduled": ["draft", "published"],
        "published": None,
    }


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def restore_root_logging():
    """Restaura handlers/nível do root logger após configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
