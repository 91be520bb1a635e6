"""Assembles chart figures into a single self-contained HTML match report."""

from __future__ import annotations

import datetime
import html

import plotly.io as pio

from viz.charts import (
    decision_mix,
    hp_timeline,
    latency_percentile_bars,
    latency_violin,
    rounds_per_match,
    win_rate_bar,
)

_CSS = """
* { box-sizing: border-box; margin: 0; padding: 0; }
body {
    background: #0e0e0e;
    color: #e0e0e0;
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
    padding: 2.5rem 3rem;
    max-width: 1400px;
    margin: 0 auto;
}
header { margin-bottom: 2.5rem; }
h1 { font-size: 1.5rem; font-weight: 600; letter-spacing: -0.02em; }
.meta { color: #666; font-size: 0.85rem; margin-top: 0.4rem; }
.meta span { margin-right: 1.5rem; }
h2 {
    font-size: 0.75rem;
    font-weight: 600;
    letter-spacing: 0.1em;
    text-transform: uppercase;
    color: #555;
    margin: 2.5rem 0 1rem;
    padding-bottom: 0.5rem;
    border-bottom: 1px solid #1e1e1e;
}
.charts { display: flex; flex-wrap: wrap; gap: 1rem; }
.chart { flex: 1 1 560px; min-width: 0; background: #141414; border-radius: 8px; overflow: hidden; }
.chart-full { flex: 1 1 100%; background: #141414; border-radius: 8px; overflow: hidden; }
.log {
    background: #141414;
    border-radius: 8px;
    overflow: auto;
    max-height: 520px;
    font-size: 0.8rem;
}
.log table { width: 100%; border-collapse: collapse; }
.log th {
    position: sticky; top: 0;
    background: #1a1a1a;
    color: #666;
    font-weight: 600;
    letter-spacing: 0.07em;
    text-transform: uppercase;
    font-size: 0.68rem;
    padding: 0.55rem 0.9rem;
    text-align: left;
    border-bottom: 1px solid #2a2a2a;
}
.log td {
    padding: 0.45rem 0.9rem;
    border-bottom: 1px solid #1c1c1c;
    vertical-align: top;
    color: #bbb;
}
.log tr:last-child td { border-bottom: none; }
.log td.dim { color: #555; }
.log td.reasoning { color: #999; font-style: italic; }
.fallback { color: #F76E6E; font-weight: 600; }
"""

_HTML_BASE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>LLM Arena: {team1} vs {team2}</title>
  <style>{css}</style>
</head>
<body>
  <header>
    <h1>LLM Arena Match Report</h1>
    <p class="meta">
      <span>{team1} vs {team2}</span>
      <span>{n_matches} match(es)</span>
      <span>{date}</span>
    </p>
  </header>

  <h2>Overview</h2>
  <div class="charts">
    <div class="chart-full">{win_rate_bar}</div>
    <div class="chart">{rounds_per_match}</div>
    {decision_mix_slot}
  </div>

  <h2>First Match</h2>
  <div class="charts">
    <div class="chart-full">{hp_timeline}</div>
  </div>

  {llm_section}
  {reasoning_section}
</body>
</html>
"""

_LLM_SECTION = """\
  <h2>LLM Decision Analysis</h2>
  <div class="charts">
    <div class="chart">{latency_violin}</div>
    <div class="chart">{latency_percentile_bars}</div>
  </div>
"""


def _build_reasoning_section(ts: list[dict]) -> str:
    rows = [t for t in ts if t.get("reasoning") or t.get("used_fallback")]
    if not rows:
        return ""

    rows_html = []
    for t in rows:
        action = (
            '<span class="fallback">fallback</span>'
            if t["used_fallback"]
            else html.escape(t["action"])
        )
        rows_html.append(
            f"<tr>"
            f'<td class="dim">{html.escape(t["match_id"])}</td>'
            f'<td class="dim">{t["turn"]}</td>'
            f"<td>{html.escape(t['character'])}</td>"
            f"<td>{action}</td>"
            f"<td>{html.escape(t['target'])}</td>"
            f'<td class="reasoning">{html.escape(t.get("reasoning") or "")}</td>'
            f"</tr>"
        )

    table = (
        "<table>"
        "<thead><tr>"
        "<th>match</th><th>turn</th><th>character</th><th>action</th><th>target</th>"
        "<th>reasoning</th>"
        "</tr></thead>"
        f"<tbody>{''.join(rows_html)}</tbody>"
        "</table>"
    )
    return f'\n  <h2>Decision Reasoning Log</h2>\n  <div class="log">{table}</div>'


def _fig_div(fig, *, first: bool) -> str:
    return pio.to_html(
        fig,
        full_html=False,
        include_plotlyjs=first,
        config={"displayModeBar": False, "responsive": True},
    )


def build_report(data: dict) -> str:
    s = data["summary"]
    matches = data["matches"]
    actions = data["actions"]
    ts = data["turn_stats"]
    team1, team2 = s["team1"], s["team2"]

    base_figs = [
        win_rate_bar(team1, team2, s["team1_wins"], s["team2_wins"], s["draws"], s["n_matches"]),
        rounds_per_match(matches),
    ]
    divs = [_fig_div(fig, first=(i == 0)) for i, fig in enumerate(base_figs)]

    timeline_div = ""
    if matches:
        first = matches[0]
        first_actions = [a for a in actions if a["match_id"] == first["match_id"]]
        timeline_div = _fig_div(hp_timeline(first, first_actions), first=False)

    decision_mix_slot = ""
    llm_section = ""
    if ts:
        mix_div = _fig_div(decision_mix(ts), first=False)
        decision_mix_slot = f'<div class="chart">{mix_div}</div>'
        llm_section = _LLM_SECTION.format(
            latency_violin=_fig_div(latency_violin(ts), first=False),
            latency_percentile_bars=_fig_div(latency_percentile_bars(ts), first=False),
        )

    date = datetime.datetime.now().strftime("%Y-%m-%d %H:%M")

    return _HTML_BASE.format(
        css=_CSS,
        team1=html.escape(team1),
        team2=html.escape(team2),
        n_matches=s["n_matches"],
        date=date,
        win_rate_bar=divs[0],
        rounds_per_match=divs[1],
        decision_mix_slot=decision_mix_slot,
        hp_timeline=timeline_div,
        llm_section=llm_section,
        reasoning_section=_build_reasoning_section(ts),
    )
