"""
MatchRunner: plays N matches between two lineups and aggregates the results.

Knows nothing about which players sit behind each character; works
identically for rule-based vs random or Mistral vs a local model.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from benchmark.types import MatchReport, MatchResult, TurnStat
from bot.player import Player
from game.controller import GameController
from game.model import Character

logger = logging.getLogger(__name__)


@dataclass
class Lineup:
    team1: list[Character]
    team2: list[Character]
    players: dict[Character, Player]


def team_label(team: list[Character], players: dict[Character, Player]) -> str:
    parts = []
    for c in team:
        player = players.get(c)
        parts.append(f"{c.name}({player.name if player else '?'})")
    return " + ".join(parts)


class MatchRunner:
    def __init__(
        self,
        lineup_builder: Callable[[], Lineup],
        max_rounds: int | None = None,
        verbose: bool = True,
    ) -> None:
        self._lineup_builder = lineup_builder
        self._max_rounds = max_rounds
        self._verbose = verbose

    def run(self, n_matches: int) -> MatchReport:
        results: list[MatchResult] = []
        players: dict[int, Player] = {}
        labels: tuple[str, str] | None = None

        start = time.time()
        try:
            for i in range(n_matches):
                lineup = self._lineup_builder()
                for p in lineup.players.values():
                    players.setdefault(id(p), p)
                if labels is None:
                    labels = (
                        team_label(lineup.team1, lineup.players),
                        team_label(lineup.team2, lineup.players),
                    )

                controller = GameController(
                    lineup.team1,
                    lineup.team2,
                    lineup.players,
                    max_rounds=self._max_rounds,
                    match_id=f"m{i + 1}-{uuid.uuid4().hex[:6]}",
                    verbose=self._verbose,
                )
                result = controller.play_game()
                controller.display_result()
                results.append(result)
        finally:
            for p in players.values():
                p.close()
        elapsed = time.time() - start

        turn_stats: list[TurnStat] = []
        for p in players.values():
            turn_stats += getattr(p, "turn_stats", [])

        team1_label, team2_label = labels or ("team1", "team2")
        report = MatchReport(
            team1_label=team1_label,
            team2_label=team2_label,
            n_matches=n_matches,
            team1_wins=sum(1 for r in results if r.winner == 1),
            team2_wins=sum(1 for r in results if r.winner == 2),
            draws=sum(1 for r in results if r.winner is None),
            results=results,
            total_duration_s=elapsed,
            turn_stats=turn_stats,
        )

        logger.info(
            "Done: %d match(es) in %.1fs · team 1 %dW/%dL/%dD · win rate %.1f%% · avg %.1f rounds",
            n_matches,
            elapsed,
            report.team1_wins,
            report.team2_wins,
            report.draws,
            report.team1_win_rate * 100,
            report.avg_rounds,
        )
        return report
