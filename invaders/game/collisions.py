"""
Collision detection and per-tick resolution for the play state.

resolve_tick() runs the checks in a fixed order and reports how the tick
ended; the play state performs the resulting state transition.
"""

from enum import Enum
from typing import TYPE_CHECKING

from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .controller import Game
    from .states import PlayState

logger = get_logger(__name__)

LEVEL_CLEAR_BONUS = 50


class TickOutcome(Enum):
    """How a simulation tick ended."""
    CONTINUE = "continue"
    LOST = "lost"
    LEVEL_CLEARED = "level_cleared"


def resolve_rocket_hits(game: "Game", play: "PlayState") -> int:
    """Remove rocket/invader pairs that overlap. Returns the number of kills."""
    play.rockets, destroyed = play.formation.remove_hit(play.rockets)
    for _ in destroyed:
        game.score += play.settings.points_per_invader
        game.audio.play_sound("bang")
    return len(destroyed)


def resolve_bomb_hits(game: "Game", play: "PlayState") -> int:
    """Remove bombs touching the ship, one life each. Returns hits taken."""
    ship_box = play.ship.bounds
    remaining = []
    hits = 0
    for bomb in play.bombs:
        if bomb.bounds.overlaps(ship_box):
            hits += 1
            game.lives -= 1
            game.audio.play_sound("explosion")
        else:
            remaining.append(bomb)
    play.bombs = remaining
    return hits


def resolve_ship_contact(game: "Game", play: "PlayState") -> bool:
    """An invader touching the ship ends the game outright."""
    ship_box = play.ship.bounds
    for invader in play.formation:
        if invader.bounds.overlaps(ship_box):
            game.lives = 0
            game.audio.play_sound("explosion")
            return True
    return False


def resolve_tick(game: "Game", play: "PlayState") -> TickOutcome:
    """
    Resolve collisions and end-of-tick conditions.

    Order: rockets vs invaders, bombs vs ship, invaders vs ship, then the
    loss check, then the win check. Loss takes precedence over a cleared
    formation.

    Args:
        game: The game context (lives, score, level, audio)
        play: The active play state (entities)

    Returns:
        TickOutcome describing which transition, if any, is due
    """
    resolve_rocket_hits(game, play)
    resolve_bomb_hits(game, play)
    resolve_ship_contact(game, play)

    if game.lives <= 0:
        game.lives = 0
        logger.info("Game over at level %d with score %d", game.level, game.score)
        return TickOutcome.LOST

    if play.formation.is_empty:
        game.score += play.level * LEVEL_CLEAR_BONUS
        game.level += 1
        logger.info("Level %d cleared, score %d", play.level, game.score)
        return TickOutcome.LEVEL_CLEARED

    return TickOutcome.CONTINUE
