import argparse
import json
import logging
import threading
from typing import Any, Dict, List, Optional

from config import load_settings
from domain.constants import STARTING_LIVES, VALID_MOVES, clamp_level
from domain.effects import Effect
from players import CONTINUE, KeyboardTranslator, Player, RandomPlayer
from services.audio_cues import AudioCueRecorder
from services.level_controller import (
    GAME_OVER,
    LEVEL_CLEARED,
    LIFE_LOST,
    PLAYING,
    LevelController,
)
from services.overlay_timer import ManualScheduler, ThreadingScheduler
from services.random_source import RandomSource, SystemRandomSource
from services.turn_engine import TurnEngine, TurnResult, new_game

OVERLAY_TEXT = {
    LIFE_LOST: "Life Lost - press Enter to retry",
    GAME_OVER: "Game Over - press Enter to restart level 1",
    LEVEL_CLEARED: "Level Cleared - press Enter for the next level",
}


class GameSession:
    """
    One player's session: the turn engine, the level controller watching it,
    and the audio cue recorder, wired together.

    Input methods are serialized by a lock so a turn always finishes before
    the next input is looked at.
    """

    def __init__(
        self,
        level: int = 1,
        rng: Optional[RandomSource] = None,
        scheduler=None,
        overlay_delay_ms: int = 1000,
    ):
        self.rng = rng or SystemRandomSource()
        self.engine = TurnEngine(new_game(clamp_level(level), STARTING_LIVES, self.rng), self.rng)
        self.controller = LevelController(self.engine, overlay_delay_ms, scheduler or ThreadingScheduler())
        self.audio = AudioCueRecorder()
        self.engine.subscribe(self.audio)
        self.keyboard = KeyboardTranslator()
        self.last_effects: List[Effect] = []
        self._lock = threading.RLock()

    @property
    def state(self):
        return self.engine.snapshot

    def move(self, direction: str) -> TurnResult:
        with self._lock:
            result = self.engine.step(direction)
            self.last_effects = list(result.effects)
            return result

    def acknowledge(self) -> bool:
        with self._lock:
            self.last_effects = []
            return self.controller.acknowledge()

    def select_level(self, raw: Any) -> int:
        with self._lock:
            self.last_effects = []
            return self.controller.select_level(raw)

    def press(self, key: str, repeat: bool = False) -> Optional[str]:
        """
        Feed a raw key event. Returns the command it mapped to, if any.
        """
        command = self.keyboard.translate(key, repeat=repeat)
        if command == CONTINUE:
            self.acknowledge()
        elif command in VALID_MOVES:
            self.move(command)
        return command

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "state": self.engine.snapshot.to_dict(),
                "controller": self.controller.to_dict(),
                "effects": [e.to_dict() for e in self.last_effects],
                "cues": self.audio.drain(),
            }


# -------------------------------
# Play loops
# -------------------------------

def run_autoplay(session: GameSession, turns: int, player: Player, scheduler: ManualScheduler) -> Dict[str, Any]:
    """
    Drive the session with an automated player for a number of turns,
    continuing through every terminal phase once its overlay is up.
    """
    deaths = 0
    levels_cleared = 0
    best_level = session.state.level

    for _ in range(turns):
        phase = session.controller.phase
        if phase != PLAYING:
            if phase == LEVEL_CLEARED:
                levels_cleared += 1
            else:
                deaths += 1
            scheduler.advance(session.controller.overlay_delay_ms)
            print(f"\n{OVERLAY_TEXT[phase]}\n")
            session.acknowledge()
            best_level = max(best_level, session.state.level)
            continue

        direction = player.get_move(session.state)
        result = session.move(direction)
        if result.accepted:
            print(f"\nTurn {session.state.turn}: {direction} -> {[e.kind for e in result.effects]}")
            print(session.state.print_board())

    summary = {
        "level": session.state.level,
        "lives": session.state.lives,
        "score": session.state.score,
        "deaths": deaths,
        "levels_cleared": levels_cleared,
        "best_level": best_level,
    }
    return summary


def run_interactive(session: GameSession) -> None:
    print("w/a/s/d to move, Enter or 'c' to continue, 'l <n>' to pick a level, 'q' to quit.")
    print(session.state.print_board())
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break

        if line == "q":
            break
        if line in ("", "c"):
            if not session.acknowledge() and session.controller.phase != PLAYING:
                print("Hold on...")
        elif line.startswith("l"):
            level = session.select_level(line[1:].strip())
            print(f"Starting level {level}")
        else:
            for key in line:
                session.press(key)
                if session.state.is_terminal:
                    break

        print(session.state.print_board())
        print(
            f"Level: {session.state.level} | Lives: {session.state.lives} | "
            f"Length: {session.state.snake.length} | Score: {session.state.score} | "
            f"Reveal: {session.state.reveal_turns}"
        )
        cues = session.audio.drain()
        if cues:
            print(f"Sounds: {', '.join(cues)}")
        if session.controller.phase != PLAYING:
            print(OVERLAY_TEXT[session.controller.phase])


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Play Invisisnake, the turn-based snake with a fading tail, in the terminal."
    )
    parser.add_argument("--level", type=str, required=False, default=str(settings.start_level),
                        help="Level to start on (1-10)")
    parser.add_argument("--seed", type=int, required=False, default=settings.seed,
                        help="Seed for a reproducible session")
    parser.add_argument("--autoplay", type=int, required=False, default=None, metavar="TURNS",
                        help="Let a random player take this many turns instead of reading input")
    parser.add_argument("--log-level", type=str, required=False, default=settings.log_level,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    rng = SystemRandomSource(args.seed)
    if args.autoplay is not None:
        scheduler = ManualScheduler()
        session = GameSession(clamp_level(args.level), rng, scheduler, settings.overlay_delay_ms)
        summary = run_autoplay(session, args.autoplay, RandomPlayer(rng), scheduler)
        print("\nAutoplay Summary:")
        print(json.dumps(summary, indent=2))
    else:
        session = GameSession(clamp_level(args.level), rng, ThreadingScheduler(), settings.overlay_delay_ms)
        run_interactive(session)


if __name__ == "__main__":
    main()
