import random

import pytest

from lineupforge.core.config import get_settings
from lineupforge.schemas.lineup import LineupPlayer


@pytest.fixture(autouse=True)
def reset_settings_cache():
    # get_settings is cached; tests that patch the environment need a fresh read.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def rng():
    return random.Random(20240601)


@pytest.fixture()
def trio():
    return [
        LineupPlayer(id="p1", name="Alice", preference=["S1", "S2", "S3"]),
        LineupPlayer(id="p2", name="Bob", preference=["S2", "S1", "S3"]),
        LineupPlayer(id="p3", name="Carol", preference=["S3", "S2", "S1"]),
    ]
