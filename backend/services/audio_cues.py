"""
Maps turn effects to the fire-and-forget sound cues a player should hear.

Sound synthesis lives outside this project; this module only decides which
cue an effect triggers.
"""

import logging
from typing import Callable, List, Optional

from domain.effects import AteFruit, Died, Effect, Moved, PickedUp, Won
from domain.game_state import GameState

logger = logging.getLogger(__name__)

CUE_MOVE = "move"
CUE_FRUIT = "fruit"
CUE_PICKUP = "pickup"
CUE_LIFE_LOST = "life_lost"
CUE_GAME_OVER = "game_over"
CUE_WIN = "win"


def cue_for_effect(effect: Effect) -> Optional[str]:
    if isinstance(effect, Moved):
        return CUE_MOVE
    if isinstance(effect, AteFruit):
        return CUE_FRUIT
    if isinstance(effect, PickedUp):
        return CUE_PICKUP
    if isinstance(effect, Died):
        return CUE_LIFE_LOST if effect.lives_remaining > 0 else CUE_GAME_OVER
    if isinstance(effect, Won):
        return CUE_WIN
    return None


class AudioCueRecorder:
    """
    Engine subscriber that collects cues and forwards them to an optional
    player callback.
    """

    def __init__(self, play: Optional[Callable[[str], None]] = None):
        self.play = play
        self.cues: List[str] = []

    def __call__(self, effect: Effect, state: GameState) -> None:
        cue = cue_for_effect(effect)
        if cue is None:
            return
        self.cues.append(cue)
        logger.debug("Cue %s for %s", cue, effect.kind)
        if self.play is not None:
            self.play(cue)

    def drain(self) -> List[str]:
        cues, self.cues = self.cues, []
        return cues
