"""
LLM Arena: entry point.

    python main.py
    python main.py --team1 warrior:Conan:mistral:mistral-large-latest \\
                   --team1 mage:Gandalf:rule \\
                   --team2 archer:Legolas:human --team2 rogue:Shadow:random --n 3

Each --team1/--team2 entry is TYPE:NAME:PLAYER. Player specs:
    human | rule | random | mistral:<model-id> | hf:<model-id> | openai:<model-id>

Log level (default INFO, set via env or flag):
    LOG_LEVEL=DEBUG python main.py ...
    python main.py --log-level DEBUG ...
"""

from __future__ import annotations

import argparse
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from benchmark.export import write_report
from benchmark.runner import Lineup, MatchRunner
from bot.player import Player
from bot.players._shared import DEFAULT_TIMEOUT_S
from bot.players.human import HumanPlayer
from bot.players.random import RandomPlayer
from bot.players.rule_based import RuleBasedPlayer
from game.factory import CharacterFactory
from game.model import Character, CharacterType

logger = logging.getLogger(__name__)

_DEFAULT_TEAM1 = ["archer:Legolas:rule", "rogue:Shadow:rule"]
_DEFAULT_TEAM2 = ["warrior:Conan:rule", "mage:Gandalf:random"]


def _setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)  # silence third-party noise by default

    # Our packages follow the user-specified level.
    for name in ("__main__", "game", "bot", "benchmark"):
        logging.getLogger(name).setLevel(level)

    if level == logging.DEBUG:
        # Surface raw HTTP traffic to the model endpoints too.
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
        logging.getLogger("httpx").setLevel(logging.DEBUG)


def _default_output(n: int) -> str:
    tag = uuid.uuid4().hex[:6]
    return str(Path("runs") / f"match_n{n}_{tag}.json")


def build_player(spec: str, timeout_s: float = DEFAULT_TIMEOUT_S, seed: int | None = None) -> Player:
    """Player registry. Add new players here; nothing else needs to change.

    Available players:
      human
      rule
      random
      mistral:<model-id>   e.g. mistral:mistral-large-latest
      hf:<model-id>        e.g. hf:mistralai/Mistral-7B-Instruct-v0.3
      openai:<model-id>    e.g. openai:gpt-4o-mini (honours OPENAI_BASE_URL)
    """
    if spec == "human":
        return HumanPlayer()
    if spec == "rule":
        return RuleBasedPlayer()
    if spec == "random":
        return RandomPlayer(seed=seed)
    if spec.startswith("mistral:"):
        from bot.players.mistral import MistralPlayer

        return MistralPlayer(model_id=spec.removeprefix("mistral:"), timeout_s=timeout_s)
    if spec.startswith("hf:"):
        from bot.players.hf import HFPlayer

        return HFPlayer(model_id=spec.removeprefix("hf:"), timeout_s=timeout_s)
    if spec.startswith("openai:"):
        from bot.players.openai import OpenAIPlayer

        return OpenAIPlayer(model_id=spec.removeprefix("openai:"), timeout_s=timeout_s)
    raise ValueError(
        f"Unknown player '{spec}'. Available: human, rule, random, "
        "mistral:<model-id>, hf:<model-id>, openai:<model-id>"
    )


@dataclass(frozen=True)
class Slot:
    type: CharacterType
    name: str
    player_spec: str


def parse_slot(entry: str) -> Slot:
    """TYPE:NAME:PLAYER. The player part may itself contain colons."""
    parts = entry.split(":", 2)
    if len(parts) != 3 or not all(p.strip() for p in parts):
        raise ValueError(f"Expected TYPE:NAME:PLAYER, got '{entry}'")
    type_name, name, player_spec = (p.strip() for p in parts)
    try:
        character_type = CharacterType(type_name.lower())
    except ValueError:
        valid = ", ".join(t.value for t in CharacterType)
        raise ValueError(f"Unknown character type '{type_name}'. Available: {valid}") from None
    return Slot(character_type, name, player_spec)


def make_lineup_builder(
    team1: list[Slot],
    team2: list[Slot],
    timeout_s: float = DEFAULT_TIMEOUT_S,
    seed: int | None = None,
):
    """Players are built once and reused; characters are rebuilt for every match.

    With a seed, every slot gets its own (seed + slot index, team 2 after team 1).
    """

    def slot_seed(index: int) -> int | None:
        return None if seed is None else seed + index

    players1 = [build_player(s.player_spec, timeout_s, slot_seed(i)) for i, s in enumerate(team1)]
    players2 = [
        build_player(s.player_spec, timeout_s, slot_seed(len(team1) + i))
        for i, s in enumerate(team2)
    ]

    def build() -> Lineup:
        chars1 = [CharacterFactory.create(s.type, s.name) for s in team1]
        chars2 = [CharacterFactory.create(s.type, s.name) for s in team2]
        mapping: dict[Character, Player] = dict(zip(chars1, players1, strict=True))
        mapping.update(zip(chars2, players2, strict=True))
        return Lineup(team1=chars1, team2=chars2, players=mapping)

    return build


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="LLM Arena: turn-based RPG match runner")
    parser.add_argument(
        "--team1",
        action="append",
        metavar="TYPE:NAME:PLAYER",
        help=f"Team 1 member, repeatable (default: {' '.join(_DEFAULT_TEAM1)})",
    )
    parser.add_argument(
        "--team2",
        action="append",
        metavar="TYPE:NAME:PLAYER",
        help=f"Team 2 member, repeatable (default: {' '.join(_DEFAULT_TEAM2)})",
    )
    parser.add_argument("--n", type=int, default=1, help="Number of matches")
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=100,
        help="Stalemate guard: end a match as a draw after this many rounds (0 disables).",
    )
    parser.add_argument(
        "--llm-timeout",
        type=float,
        default=float(os.getenv("LLM_TIMEOUT_S", DEFAULT_TIMEOUT_S)),
        metavar="SECONDS",
        help="Per-call timeout for LLM players (also reads LLM_TIMEOUT_S). Default: 30.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for random players")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log verbosity (also reads LOG_LEVEL env var). Default: INFO.",
    )
    parser.add_argument(
        "--output",
        default=None,
        metavar="PATH",
        help="Write JSON report to this path (default: runs/match_n<n>_<hash>.json).",
    )
    parser.add_argument("--no-report", action="store_true", help="Skip writing the JSON report.")
    args = parser.parse_args()

    _setup_logging(args.log_level)

    try:
        team1 = [parse_slot(e) for e in (args.team1 or _DEFAULT_TEAM1)]
        team2 = [parse_slot(e) for e in (args.team2 or _DEFAULT_TEAM2)]
        builder = make_lineup_builder(team1, team2, timeout_s=args.llm_timeout, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    logger.info(
        "Starting: %s vs %s · %d match(es)",
        [s.name for s in team1],
        [s.name for s in team2],
        args.n,
    )

    runner = MatchRunner(builder, max_rounds=args.max_rounds or None)
    report = runner.run(args.n)

    print()
    print(
        f"  Done - {report.n_matches} match(es) in {report.total_duration_s:.1f}s · "
        f"team 1 {report.team1_wins}W / {report.team2_wins}L / {report.draws}D · "
        f"avg {report.avg_rounds:.1f} rounds"
    )

    if args.no_report:
        return
    out = args.output or _default_output(args.n)
    Path(out).parent.mkdir(parents=True, exist_ok=True)
    write_report(report, out)
    print(f"  Report saved to {out}")


if __name__ == "__main__":
    main()
