"""Export a MatchReport to a structured JSON file."""

from __future__ import annotations

import dataclasses
import json

from benchmark.types import MatchReport


def report_to_dict(report: MatchReport) -> dict:
    players = report.players()
    return {
        "summary": {
            "team1": report.team1_label,
            "team2": report.team2_label,
            "n_matches": report.n_matches,
            "team1_wins": report.team1_wins,
            "team2_wins": report.team2_wins,
            "draws": report.draws,
            "team1_win_rate": report.team1_win_rate,
            "avg_rounds": report.avg_rounds,
            "total_duration_s": report.total_duration_s,
            "players": {
                p: {
                    "avg_decision_ms": report.avg_decision_ms(p),
                    "fallback_rate": report.fallback_rate(p),
                }
                for p in players
            },
        },
        "matches": [
            {
                k: v
                for k, v in dataclasses.asdict(r).items()
                if k != "actions"
            }
            for r in report.results
        ],
        "actions": [dataclasses.asdict(a) for r in report.results for a in r.actions],
        "turn_stats": [dataclasses.asdict(t) for t in report.turn_stats],
    }


def write_report(report: MatchReport, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report_to_dict(report), f, indent=2)
