import random

import pytest
from fastapi.testclient import TestClient

from memory_match.domain.entities.card import Card
from memory_match.domain.services.score_board import ScoreBoard
from memory_match.domain.services.session_controller import SessionController


class StaticImageCatalog:
    """ImageCatalog serving a fixed list of keys."""

    def __init__(self, keys):
        self._keys = list(keys)

    def get_image_keys(self):
        return list(self._keys)

    def get_image_file(self, image_key):
        return f"{image_key}.png" if image_key in self._keys else None


def make_cards(*image_keys):
    """Deal cards in the given order, ids numbered from 0."""
    return [Card(id=index, image_key=key) for index, key in enumerate(image_keys)]


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def score_board():
    return ScoreBoard(capacity=5)


@pytest.fixture()
def image_catalog():
    return StaticImageCatalog(["bee", "lion", "owl", "cat"])


@pytest.fixture()
def controller(score_board, image_catalog, rng):
    return SessionController(
        score_board,
        image_catalog,
        pair_count=2,
        evaluation_delay_ms=10,
        match_reward=20,
        rng=rng,
    )


def _make_client(monkeypatch, evaluation_delay_ms):
    monkeypatch.setenv("MEMORY_EVALUATION_DELAY_MS", str(evaluation_delay_ms))
    monkeypatch.setenv("MEMORY_PAIR_COUNT", "2")
    monkeypatch.delenv("IMAGE_CATALOG_PATH", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    from memory_match.app import app

    return TestClient(app)


@pytest.fixture()
def client(monkeypatch):
    with _make_client(monkeypatch, 10) as test_client:
        yield test_client


@pytest.fixture()
def slow_client(monkeypatch):
    """Client whose revealed pairs stay up long enough to observe."""
    with _make_client(monkeypatch, 2000) as test_client:
        yield test_client
