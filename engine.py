import logging
import random
from collections import OrderedDict
from typing import Callable, Dict, Iterable, Optional, Sequence

from models import Board, Coord, MoveRequest, MoveResponse, Snake

logger = logging.getLogger(__name__)

# Score added when a move closes in on the board center along one axis
CORNER_AVOIDANCE = 2

FALLBACK_MOVE = "down"
NO_MOVES_SHOUT = "I HAVE NO MOVES LEFT!!!"

DIRECTIONS = ('up', 'down', 'left', 'right')
DIRECTION_VECTORS = {
    'up': (0, 1),
    'down': (0, -1),
    'left': (-1, 0),
    'right': (1, 0),
}

# direction -> resulting head position, always in DIRECTIONS order
MoveSet = Dict[str, Coord]


def get_new_position(head: Coord, direction: str) -> Coord:
    """Calculate new head position for a given direction"""
    dx, dy = DIRECTION_VECTORS[direction]
    return Coord(head[0] + dx, head[1] + dy)


def is_out_of_bounds(pos: Coord, board: Board) -> bool:
    """Check if position is outside board boundaries"""
    return not board.in_bounds(pos)


def safe_moves(head: Coord, board: Board, extra_bodies: Iterable[Sequence[Coord]] = ()) -> MoveSet:
    """Get all moves from head that don't immediately kill us (walls, hazards, snake bodies)"""
    moves = OrderedDict((d, get_new_position(head, d)) for d in DIRECTIONS)
    logger.debug("Possible moves: %s", dict(moves))

    hazards = set(board.hazards)
    occupied = set()
    for snake in board.snakes:
        occupied.update(snake.body)
    for body in extra_bodies:
        occupied.update(body)

    for direction, pos in list(moves.items()):
        if is_out_of_bounds(pos, board):
            reason = "colliding with wall"
        elif pos in hazards:
            reason = "colliding with hazard"
        elif pos in occupied:
            reason = "colliding with a snake"
        else:
            continue
        logger.debug("Removing move %s -> %s for %s", direction, pos, reason)
        del moves[direction]

    logger.debug("Moves remaining: %s", dict(moves))
    return moves


def possible_moves(you: Snake, board: Board) -> MoveSet:
    """Moves for our snake that survive this turn.

    Our own body is always checked, even when the board's snake list
    doesn't include us. The tail counts as occupied.
    """
    return safe_moves(you.head, board, extra_bodies=(you.body,))


def rate_moves(moves: MoveSet, head: Coord, board: Board) -> Dict[str, int]:
    """Score each move by whether it closes in on the center, one axis at a time"""
    center = board.center
    head_dx = abs(head[0] - center.x)
    head_dy = abs(head[1] - center.y)

    ratings = {}
    for direction, pos in moves.items():
        rating = 0
        if abs(pos[0] - center.x) < head_dx:
            rating += CORNER_AVOIDANCE
        elif abs(pos[1] - center.y) < head_dy:
            rating += CORNER_AVOIDANCE
        ratings[direction] = rating
    return ratings


def pick_center(moves: MoveSet, head: Coord, board: Board, rng: random.Random) -> str:
    """Lowest rated move, ties go to the direction name that sorts first"""
    ratings = rate_moves(moves, head, board)
    # NOTE: lowest rating wins, so moves toward the center lose to the rest.
    # This inverts the corner avoidance the rating was meant for; kept as is
    # because changing it changes how the snake plays.
    ranked = sorted(ratings, key=lambda d: (ratings[d], d))
    logger.debug("Rated moves: %s", [(d, ratings[d]) for d in ranked])
    return ranked[0]


def pick_random(moves: MoveSet, head: Coord, board: Board, rng: random.Random) -> str:
    """Any surviving move, drawn in DIRECTIONS order"""
    return rng.choice([d for d in DIRECTIONS if d in moves])


PickFunc = Callable[[MoveSet, Coord, Board, random.Random], str]

STRATEGIES: Dict[str, PickFunc] = {
    'center': pick_center,
    'random': pick_random,
}


def choose_move(moves: MoveSet, head: Coord, board: Board,
                rng: Optional[random.Random] = None, pick: PickFunc = pick_center) -> MoveResponse:
    """Pick one move out of the surviving set. Never fails, even on an empty set."""
    if not moves:
        logger.debug("No safe moves, falling back to %s", FALLBACK_MOVE)
        return MoveResponse(FALLBACK_MOVE, NO_MOVES_SHOUT)
    rng = rng if rng is not None else random.Random()
    return MoveResponse(pick(moves, head, board, rng))


class BattlesnakeLogic:
    """Stateless move picker: survival filter followed by the selector."""

    def __init__(self, strategy: str = 'center', rng: Optional[random.Random] = None):
        if strategy not in STRATEGIES:
            raise ValueError(f"unknown strategy {strategy!r}, expected one of {tuple(STRATEGIES)}")
        self.strategy = strategy
        self.pick = STRATEGIES[strategy]
        self.rng = rng if rng is not None else random.Random()

    def get_move(self, request: MoveRequest) -> MoveResponse:
        """Main function to determine the next move"""
        moves = possible_moves(request.you, request.board)
        return choose_move(moves, request.you.head, request.board, rng=self.rng, pick=self.pick)
