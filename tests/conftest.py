import os
import sys
import random
import pytest

# Ensure the repo root (containing core/, stages/, settings.py) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from core.config import SessionConfig
from core.controller import SessionController
from core.highscore import HighScoreStore
from core.scheduler import Scheduler
from core.spawner import PromptSpawner
from stages.catalog import CATALOG


@pytest.fixture()
def config_path(tmp_path):
    return tmp_path / 'config.json'


@pytest.fixture()
def store(config_path):
    return HighScoreStore(config_path)


@pytest.fixture()
def make_controller(store):
    """Build a controller with a seeded spawner and a fresh scheduler."""
    def _make(stage_order=(1,), speed=2.0, catalog=CATALOG, **kwargs):
        spawner = PromptSpawner(catalog, rng=random.Random(7), clock=lambda: 0.0)
        return SessionController(
            catalog,
            SessionConfig(tuple(stage_order), speed),
            kwargs.pop('high_scores', store),
            spawner=spawner,
            scheduler=Scheduler(),
            **kwargs,
        )
    return _make


@pytest.fixture()
def events():
    return []
