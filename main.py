import logging
import random
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional

from flask import Flask, jsonify, request

from config import Settings
from engine import FALLBACK_MOVE, BattlesnakeLogic
from models import Game, InvalidGameState, MoveRequest, MoveResponse

logger = logging.getLogger(__name__)

DEADLINE_SHOUT = "Out of time!"


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidGameState("request body must be a JSON object")
    return data


def create_app(settings: Optional[Settings] = None, snake_logic: Optional[BattlesnakeLogic] = None) -> Flask:
    """Create Flask server for Battlesnake"""
    settings = settings or Settings.from_env()
    if snake_logic is None:
        snake_logic = BattlesnakeLogic(settings.strategy, random.Random(settings.rng_seed()))

    app = Flask(__name__)
    app.config['SETTINGS'] = settings
    app.config['SNAKE_LOGIC'] = snake_logic
    executor = ThreadPoolExecutor(max_workers=settings.move_workers, thread_name_prefix='move')
    app.config['MOVE_EXECUTOR'] = executor

    @app.errorhandler(InvalidGameState)
    def invalid_game_state(e):
        logger.warning("Rejecting request to %s: %s", request.path, e)
        return jsonify({"error": str(e)}), 400

    @app.route('/')
    def info():
        return jsonify({"apiversion": "1", **settings.appearance})

    @app.route('/start', methods=['POST'])
    def start():
        game = Game.from_json(_payload().get('game'))
        logger.info("Starting game %s", game.id)
        return "OK"

    @app.route('/move', methods=['POST'])
    def move():
        move_request = MoveRequest.from_json(_payload())
        logger.info("Turn %d: Calculating move for game %s", move_request.turn, move_request.game.id)

        future = executor.submit(snake_logic.get_move, move_request)
        try:
            response = future.result(timeout=settings.deadline_for(move_request.game.timeout))
        except FutureTimeout:
            # Drops the call if it is still queued behind a busy worker
            future.cancel()
            logger.warning("Turn %d: deadline missed, answering %s", move_request.turn, FALLBACK_MOVE)
            response = MoveResponse(FALLBACK_MOVE, DEADLINE_SHOUT)
        except Exception:
            logger.exception("Turn %d: move calculation failed, answering %s", move_request.turn, FALLBACK_MOVE)
            response = MoveResponse(FALLBACK_MOVE)

        logger.info("Making move: %s", response.move)
        return jsonify(response.to_json())

    @app.route('/end', methods=['POST'])
    def end():
        game = Game.from_json(_payload().get('game'))
        logger.info("Ending game %s", game.id)
        return "OK"

    # Health check endpoint
    @app.route('/health')
    def health():
        return jsonify({"status": "healthy"})

    return app
