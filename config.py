import os
import time
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

DEFAULT_PORT = 8080
DEFAULT_HOST = '0.0.0.0'
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_STRATEGY = 'center'

# Milliseconds
DEFAULT_MOVE_DEADLINE = 400
DEFAULT_LATENCY_MARGIN = 100

DEFAULT_MOVE_WORKERS = 4

DEFAULT_APPEARANCE = {
    "author": "aledega",
    "color": "#3366ff",
    "head": "caffeine",
    "tail": "coffee",
    "version": "0.0.1-beta",
}

_TRUE = ('1', 'true', 'yes', 'on')


def _int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    debug: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    strategy: str = DEFAULT_STRATEGY
    seed: Optional[int] = None
    move_deadline_ms: int = DEFAULT_MOVE_DEADLINE
    latency_margin_ms: int = DEFAULT_LATENCY_MARGIN
    move_workers: int = DEFAULT_MOVE_WORKERS
    appearance: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_APPEARANCE))

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from environment variables"""
        env = os.environ if env is None else env
        appearance = {
            key: env.get(f"SNAKE_{key.upper()}") or default
            for key, default in DEFAULT_APPEARANCE.items()
        }
        return cls(
            port=_int(env, 'PORT', DEFAULT_PORT),
            host=env.get('HOST') or DEFAULT_HOST,
            debug=env.get('DEBUG', "").strip().lower() in _TRUE,
            log_level=(env.get('LOG_LEVEL') or DEFAULT_LOG_LEVEL).upper(),
            strategy=(env.get('SNAKE_STRATEGY') or DEFAULT_STRATEGY).lower(),
            seed=_int(env, 'SNAKE_SEED', None),
            move_deadline_ms=_int(env, 'MOVE_DEADLINE_MS', DEFAULT_MOVE_DEADLINE),
            latency_margin_ms=_int(env, 'LATENCY_MARGIN_MS', DEFAULT_LATENCY_MARGIN),
            move_workers=max(_int(env, 'MOVE_WORKERS', DEFAULT_MOVE_WORKERS), 1),
            appearance=appearance,
        )

    def rng_seed(self) -> int:
        """Seed for the move RNG, time based unless SNAKE_SEED is set"""
        return self.seed if self.seed is not None else time.time_ns()

    def deadline_for(self, game_timeout_ms: int) -> float:
        """Seconds the engine may spend on one turn"""
        budget = min(self.move_deadline_ms, game_timeout_ms - self.latency_margin_ms)
        return max(budget, 1) / 1000.0
