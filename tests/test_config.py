import pytest

from config import DEFAULT_APPEARANCE, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.port == 8080
    assert settings.host == '0.0.0.0'
    assert settings.debug is False
    assert settings.log_level == 'INFO'
    assert settings.strategy == 'center'
    assert settings.seed is None
    assert settings.appearance == DEFAULT_APPEARANCE


def test_from_env():
    settings = Settings.from_env({
        'PORT': '9000',
        'DEBUG': 'true',
        'LOG_LEVEL': 'debug',
        'SNAKE_STRATEGY': 'Random',
        'SNAKE_SEED': '13',
        'SNAKE_COLOR': '#000000',
        'MOVE_DEADLINE_MS': '250',
    })
    assert settings.port == 9000
    assert settings.debug is True
    assert settings.log_level == 'DEBUG'
    assert settings.strategy == 'random'
    assert settings.rng_seed() == 13
    assert settings.appearance['color'] == '#000000'
    assert settings.appearance['head'] == 'caffeine'
    assert settings.move_deadline_ms == 250


def test_bad_integer_names_the_variable():
    with pytest.raises(ValueError, match='PORT'):
        Settings.from_env({'PORT': 'eighty'})


def test_deadline_takes_the_tighter_budget():
    settings = Settings(move_deadline_ms=400, latency_margin_ms=100)
    assert settings.deadline_for(500) == pytest.approx(0.4)
    assert settings.deadline_for(300) == pytest.approx(0.2)
    assert settings.deadline_for(50) == pytest.approx(0.001)


def test_move_workers():
    assert Settings.from_env({}).move_workers == 4
    assert Settings.from_env({'MOVE_WORKERS': '2'}).move_workers == 2
    assert Settings.from_env({'MOVE_WORKERS': '0'}).move_workers == 1
