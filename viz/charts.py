"""Chart factories: one function per chart, each returns a go.Figure."""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objects as go

_TEMPLATE = "plotly_dark"
_T1_COLOR = "#6EE7F7"
_T2_COLOR = "#F76E6E"
_DRAW_COLOR = "#888888"


def _team_color(team: int) -> str:
    return _T1_COLOR if team == 1 else _T2_COLOR


# ── Always-available charts ──────────────────────────────────────────────────


def win_rate_bar(
    team1: str,
    team2: str,
    team1_wins: int,
    team2_wins: int,
    draws: int,
    n_matches: int,
) -> go.Figure:
    n = max(n_matches, 1)
    t1_pct = team1_wins / n * 100
    draw_pct = draws / n * 100
    t2_pct = team2_wins / n * 100

    fig = go.Figure()
    for label, value, color in [
        (team1, t1_pct, _T1_COLOR),
        ("draw", draw_pct, _DRAW_COLOR),
        (team2, t2_pct, _T2_COLOR),
    ]:
        fig.add_trace(
            go.Bar(
                name=label,
                x=[value],
                y=[""],
                orientation="h",
                marker_color=color,
                text=f"{value:.1f}%",
                textposition="inside",
                hovertemplate=f"{label}: {value:.1f}% ({round(value * n_matches / 100)}/{n_matches})<extra></extra>",
            )
        )

    fig.update_layout(
        title="Win Rate",
        barmode="stack",
        template=_TEMPLATE,
        height=160,
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.1),
        margin=dict(t=60, b=20, l=20, r=20),
        xaxis=dict(range=[0, 100], ticksuffix="%", showgrid=False),
        yaxis=dict(showticklabels=False),
    )
    return fig


def rounds_per_match(matches: list[dict]) -> go.Figure:
    xs = list(range(1, len(matches) + 1))
    colors = [
        _DRAW_COLOR if m["winner"] is None else _team_color(m["winner"]) for m in matches
    ]
    labels = ["draw" if m["winner"] is None else f"team {m['winner']}" for m in matches]

    fig = go.Figure(
        go.Bar(
            x=xs,
            y=[m["n_rounds"] for m in matches],
            marker_color=colors,
            text=labels,
            hovertemplate="match %{x}<br>%{y} rounds<br>winner: %{text}<extra></extra>",
        )
    )
    fig.update_layout(
        title="Rounds per Match (colored by winner)",
        template=_TEMPLATE,
        height=320,
        xaxis_title="match",
        yaxis_title="rounds",
        showlegend=False,
        margin=dict(t=60, b=40, l=60, r=20),
    )
    return fig


def hp_timeline(match: dict, actions: list[dict]) -> go.Figure:
    """Health of every character after each action of one match."""
    # Names may repeat across teams, so series are keyed by (team, name).
    hp = {(c["team"], c["name"]): c["max_health"] for c in match["characters"]}
    labels = {key: f"{key[1]} (team {key[0]})" for key in hp}

    def snapshot(turn: int) -> dict:
        return {"turn": turn, **{labels[key]: value for key, value in hp.items()}}

    rows = [snapshot(0)]
    for a in actions:
        hp[(a["target_team"], a["target"])] = a["target_hp_after"]
        rows.append(snapshot(a["turn"]))
    df = pd.DataFrame(rows)

    fig = go.Figure()
    for (team, name), label in labels.items():
        fig.add_trace(
            go.Scatter(
                x=df["turn"],
                y=df[label],
                mode="lines",
                line=dict(color=_team_color(team), width=2, shape="hv"),
                name=label,
                hovertemplate=f"{name}<br>turn %{{x}}: %{{y}} HP<extra></extra>",
            )
        )

    fig.update_layout(
        title=f"HP Timeline: match {match['match_id']}",
        template=_TEMPLATE,
        height=360,
        xaxis_title="turn",
        yaxis=dict(title="HP", rangemode="tozero"),
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02),
        margin=dict(t=60, b=40, l=60, r=20),
    )
    return fig


# ── LLM-only charts (require turn_stats) ────────────────────────────────────


def latency_violin(turn_stats: list[dict]) -> go.Figure:
    df = pd.DataFrame(turn_stats)
    df = df[~df["used_fallback"] | (df["decision_ms"] > 0)]
    fig = go.Figure()

    for i, player in enumerate(df["player"].unique()):
        subset = df[df["player"] == player]["decision_ms"]
        fig.add_trace(
            go.Violin(
                x=subset,
                name=player,
                orientation="h",
                side="positive",
                marker_color=_T1_COLOR if i % 2 == 0 else _T2_COLOR,
                points="outliers",
                hovertemplate="%{x:.0f} ms<extra></extra>",
            )
        )

    fig.update_layout(
        title="Decision Latency Distribution",
        template=_TEMPLATE,
        height=320,
        xaxis=dict(title="latency (ms)", type="log"),
        yaxis_title="player",
        showlegend=False,
        margin=dict(t=60, b=50, l=20, r=20),
    )
    return fig


def latency_percentile_bars(turn_stats: list[dict]) -> go.Figure:
    df = pd.DataFrame(turn_stats)
    percentiles = [25, 50, 75, 95]
    labels = ["p25", "p50", "p75", "p95"]

    fig = go.Figure()
    for i, player in enumerate(df["player"].unique()):
        rows = df[df["player"] == player]["decision_ms"]
        values = [float(np.percentile(rows, p)) for p in percentiles]
        fig.add_trace(
            go.Bar(
                name=player,
                x=labels,
                y=values,
                marker_color=_T1_COLOR if i % 2 == 0 else _T2_COLOR,
                text=[f"{v:.0f} ms" for v in values],
                textposition="outside",
                hovertemplate="%{x}: %{y:.0f} ms<extra></extra>",
            )
        )

    fig.update_layout(
        title="Latency Percentiles (p25 / p50 / p75 / p95)",
        template=_TEMPLATE,
        height=320,
        barmode="group",
        xaxis_title="percentile",
        yaxis_title="latency (ms)",
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02),
        margin=dict(t=60, b=50, l=60, r=20),
    )
    return fig


def decision_mix(turn_stats: list[dict]) -> go.Figure:
    """Share of attack / heal / fallback turns per LLM player."""
    df = pd.DataFrame(turn_stats)
    players = list(df["player"].unique())

    df = df.copy()
    df["bucket"] = np.where(df["used_fallback"], "fallback", df["action"])

    fig = go.Figure()
    for bucket, color in [("attack", _T1_COLOR), ("heal", "#7EF79A"), ("fallback", _T2_COLOR)]:
        pcts = []
        for player in players:
            rows = df[df["player"] == player]
            pcts.append((rows["bucket"] == bucket).sum() / len(rows) * 100)
        fig.add_trace(
            go.Bar(
                name=bucket,
                x=players,
                y=pcts,
                marker_color=color,
                text=[f"{p:.1f}%" for p in pcts],
                textposition="inside",
                hovertemplate=f"{bucket}: %{{y:.1f}}%<extra></extra>",
            )
        )

    fig.update_layout(
        title="Decision Mix: attack vs heal vs fallback",
        template=_TEMPLATE,
        height=320,
        barmode="stack",
        xaxis_title="player",
        yaxis=dict(title="% of turns", ticksuffix="%", range=[0, 100]),
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02),
        margin=dict(t=60, b=60, l=60, r=20),
    )
    return fig
