import random

import pytest

from config import Settings
from engine import BattlesnakeLogic
from main import create_app
from models import MoveRequest


def _coords(*cells):
    return [{"x": x, "y": y} for x, y in cells]


def _snake_json(snake_id, body, health=90):
    return {
        "id": snake_id,
        "name": snake_id,
        "health": health,
        "body": _coords(*body),
        "head": _coords(body[0])[0],
        "tail": _coords(body[-1])[0],
        "shout": "",
    }


def _game_state(you_body, width=11, height=11, hazards=(), others=(), include_you=True, turn=1, timeout=500):
    """Battlesnake /move payload with our snake as 'you'"""
    you = _snake_json("you", you_body)
    snakes = [you] if include_you else []
    snakes += [_snake_json(f"enemy-{i}", body) for i, body in enumerate(others)]
    return {
        "game": {
            "id": "test-game",
            "ruleset": {"name": "standard", "version": "v1.2.3"},
            "map": "standard",
            "timeout": timeout,
            "source": "custom",
        },
        "turn": turn,
        "board": {
            "width": width,
            "height": height,
            "food": _coords((5, 5)),
            "hazards": _coords(*hazards),
            "snakes": snakes,
        },
        "you": you,
    }


def _move_request(*args, **kwargs):
    return MoveRequest.from_json(_game_state(*args, **kwargs))


@pytest.fixture
def logic():
    return BattlesnakeLogic(rng=random.Random(0))


@pytest.fixture
def settings():
    return Settings(seed=0)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def game_state():
    """Builder for /move payloads"""
    return _game_state


@pytest.fixture
def move_request():
    """Builder for parsed MoveRequest snapshots"""
    return _move_request
