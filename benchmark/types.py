"""Typed result containers for matches and multi-match runs."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ActionRecord:
    match_id: str
    round: int
    turn: int
    actor: str
    team: int  # 1 | 2
    kind: str  # "attack" | "heal"
    target: str
    target_team: int
    description: str
    target_hp_after: int


@dataclass
class CharacterSummary:
    name: str
    type: str
    team: int
    player: str
    health: int  # clamped at 0
    max_health: int
    alive: bool


@dataclass
class MatchResult:
    match_id: str
    winner: int | None  # 1 | 2 | None (draw by round cap)
    n_rounds: int
    n_turns: int
    n_commands: int
    timestamp: float
    characters: list[CharacterSummary] = field(default_factory=list)
    actions: list[ActionRecord] = field(default_factory=list)


@dataclass
class TurnStat:
    match_id: str
    turn: int
    player: str
    character: str
    decision_ms: float  # 0.0 when the call raised before returning
    used_fallback: bool
    action: str  # "attack" | "heal"
    target: str
    reasoning: str = ""


@dataclass
class MatchReport:
    team1_label: str
    team2_label: str
    n_matches: int
    team1_wins: int
    team2_wins: int
    draws: int
    results: list[MatchResult] = field(default_factory=list)
    total_duration_s: float = 0.0
    turn_stats: list[TurnStat] = field(default_factory=list)

    @property
    def team1_win_rate(self) -> float:
        if self.n_matches == 0:
            return 0.0
        return self.team1_wins / self.n_matches

    @property
    def avg_rounds(self) -> float:
        if not self.results:
            return 0.0
        return sum(r.n_rounds for r in self.results) / len(self.results)

    def players(self) -> list[str]:
        seen: dict[str, None] = {}
        for t in self.turn_stats:
            seen.setdefault(t.player, None)
        return list(seen)

    def avg_decision_ms(self, player: str) -> float | None:
        rows = [t for t in self.turn_stats if t.player == player]
        if not rows:
            return None
        return sum(t.decision_ms for t in rows) / len(rows)

    def fallback_rate(self, player: str) -> float | None:
        rows = [t for t in self.turn_stats if t.player == player]
        if not rows:
            return None
        return sum(1 for t in rows if t.used_fallback) / len(rows)
