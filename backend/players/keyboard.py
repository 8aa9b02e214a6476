"""
Keyboard input translation.
"""

from typing import Dict, Optional

from domain.constants import DOWN, LEFT, RIGHT, UP

CONTINUE = "CONTINUE"

KEY_BINDINGS: Dict[str, str] = {
    "ArrowUp": UP, "w": UP, "W": UP,
    "ArrowDown": DOWN, "s": DOWN, "S": DOWN,
    "ArrowLeft": LEFT, "a": LEFT, "A": LEFT,
    "ArrowRight": RIGHT, "d": RIGHT, "D": RIGHT,
    "Enter": CONTINUE, " ": CONTINUE,
}


class KeyboardTranslator:
    """
    Turns raw key events into a direction or CONTINUE.

    Auto-repeat events from a held key never produce a command, so holding a
    key moves the snake exactly once.
    """

    def __init__(self, bindings: Optional[Dict[str, str]] = None):
        self.bindings = dict(bindings or KEY_BINDINGS)

    def translate(self, key: str, repeat: bool = False) -> Optional[str]:
        if repeat:
            return None
        return self.bindings.get(key)
