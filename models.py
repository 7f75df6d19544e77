from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple


class InvalidGameState(ValueError):
    """Raised when a request payload can't be turned into a game snapshot"""


def _is_int(value) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


class Coord(NamedTuple):
    """A cell on the board. (0, 0) is bottom-left, y grows upward."""
    x: int
    y: int

    @classmethod
    def from_json(cls, data: Dict) -> "Coord":
        try:
            x, y = data['x'], data['y']
        except (KeyError, TypeError) as e:
            raise InvalidGameState(f"bad coordinate: {data!r}") from e
        if not _is_int(x) or not _is_int(y):
            raise InvalidGameState(f"bad coordinate: {data!r}")
        return cls(x, y)


def _coords(items, what: str) -> List[Coord]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise InvalidGameState(f"{what} must be a list")
    return [Coord.from_json(item) for item in items]


@dataclass(frozen=True)
class Snake:
    id: str
    health: int
    body: Tuple[Coord, ...]
    head: Coord
    tail: Coord
    name: str = ""
    shout: str = ""

    @property
    def length(self) -> int:
        return len(self.body)

    @classmethod
    def from_json(cls, data: Dict) -> "Snake":
        if not isinstance(data, dict):
            raise InvalidGameState("snake must be an object")
        try:
            snake_id = data['id']
            health = data['health']
            body = _coords(data['body'], 'body')
        except KeyError as e:
            raise InvalidGameState(f"snake is missing {e.args[0]!r}") from e
        if not _is_int(health):
            raise InvalidGameState(f"snake {snake_id!r} has a non-integer health")

        # Older payloads leave out head/tail, the body carries both ends
        if 'head' in data:
            head = Coord.from_json(data['head'])
        elif body:
            head = body[0]
        else:
            raise InvalidGameState(f"snake {snake_id!r} has neither head nor body")
        tail = Coord.from_json(data['tail']) if 'tail' in data else (body[-1] if body else head)

        return cls(
            id=str(snake_id),
            health=health,
            body=tuple(body),
            head=head,
            tail=tail,
            name=data.get('name') or "",
            shout=data.get('shout') or "",
        )


@dataclass(frozen=True)
class Board:
    width: int
    height: int
    food: Tuple[Coord, ...] = ()
    hazards: Tuple[Coord, ...] = ()
    snakes: Tuple[Snake, ...] = ()

    @property
    def center(self) -> Coord:
        return Coord(self.width // 2, self.height // 2)

    def in_bounds(self, pos: Coord) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    @classmethod
    def from_json(cls, data: Dict) -> "Board":
        if not isinstance(data, dict):
            raise InvalidGameState("board must be an object")
        try:
            width, height = data['width'], data['height']
        except KeyError as e:
            raise InvalidGameState(f"board is missing {e.args[0]!r}") from e
        if not _is_int(width) or not _is_int(height):
            raise InvalidGameState("board dimensions must be integers")

        snakes = data.get('snakes') or []
        if not isinstance(snakes, list):
            raise InvalidGameState("snakes must be a list")

        return cls(
            width=width,
            height=height,
            food=tuple(_coords(data.get('food'), 'food')),
            hazards=tuple(_coords(data.get('hazards'), 'hazards')),
            snakes=tuple(Snake.from_json(s) for s in snakes),
        )


@dataclass(frozen=True)
class Ruleset:
    name: str = ""
    version: str = ""


@dataclass(frozen=True)
class Game:
    id: str
    ruleset: Ruleset = field(default_factory=Ruleset)
    map: str = ""
    timeout: int = 500
    source: str = ""

    @classmethod
    def from_json(cls, data: Dict) -> "Game":
        if not isinstance(data, dict) or 'id' not in data:
            raise InvalidGameState("game must be an object with an id")
        ruleset = data.get('ruleset') or {}
        if not isinstance(ruleset, dict):
            raise InvalidGameState("ruleset must be an object")
        timeout = data.get('timeout', 500)
        if not _is_int(timeout):
            raise InvalidGameState("game timeout must be an integer")
        return cls(
            id=str(data['id']),
            ruleset=Ruleset(name=ruleset.get('name', ""), version=ruleset.get('version', "")),
            map=data.get('map') or "",
            timeout=timeout,
            source=data.get('source') or "",
        )


@dataclass(frozen=True)
class MoveRequest:
    game: Game
    turn: int
    board: Board
    you: Snake

    @classmethod
    def from_json(cls, data: Optional[Dict]) -> "MoveRequest":
        """Build a snapshot from the /move payload"""
        if not isinstance(data, dict):
            raise InvalidGameState("request body must be a JSON object")
        for key in ('game', 'board', 'you'):
            if key not in data:
                raise InvalidGameState(f"request is missing {key!r}")
        turn = data.get('turn', 0)
        if not _is_int(turn):
            raise InvalidGameState("turn must be an integer")
        return cls(
            game=Game.from_json(data['game']),
            turn=turn,
            board=Board.from_json(data['board']),
            you=Snake.from_json(data['you']),
        )


@dataclass(frozen=True)
class MoveResponse:
    move: str
    shout: str = ""

    def to_json(self) -> Dict[str, str]:
        return {"move": self.move, "shout": self.shout}
