"""Rich display components for the rankmedian CLI.

Renders tallies, ranking matrices, median rankings and agreement
statistics as Rich tables and panels.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rankmedian.consensus.tally import HEURISTIC_DESCRIPTIONS
from rankmedian.schemas.catalog import Heuristic
from rankmedian.schemas.ranking import (
    METHOD_DESCRIPTIONS,
    METHOD_LABELS,
    ConsensusBundle,
    ConsensusStatistics,
    RankingMethod,
    VotingResult,
)

_RANK_STYLES = {1: "green", 2: "blue", 3: "yellow"}
_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


def render_heuristics(console: Console, active: Heuristic | None = None) -> None:
    table = Table(title="Heuristics", show_lines=True)
    table.add_column("Name", style="bold cyan")
    table.add_column("Title")
    table.add_column("Description")
    for heuristic, (title, description) in HEURISTIC_DESCRIPTIONS.items():
        name = f"{heuristic.value} *" if heuristic == active else heuristic.value
        table.add_row(name, title, description)
    console.print(table)


def rank_distribution(result: VotingResult) -> Text:
    """Compact "1st: 2  2nd: 1" badge line; ranks with no mentions are omitted."""
    text = Text()
    for rank in (1, 2, 3):
        count = result.rank_counts.get(rank, 0)
        if count <= 0:
            continue
        if text:
            text.append("  ")
        text.append(f"{_ORDINALS[rank]}: {count}", style=_RANK_STYLES[rank])
    return text


def render_tally(console: Console, results: list[VotingResult], heuristic: Heuristic) -> None:
    title, _ = HEURISTIC_DESCRIPTIONS[heuristic]
    table = Table(title=f"Voting Results: {title}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Artist")
    table.add_column("Points", justify="right")
    table.add_column("Votes", justify="right")
    table.add_column("Distribution")

    for position, result in enumerate(results, start=1):
        table.add_row(
            str(position),
            result.title,
            result.artist,
            str(result.total_points),
            str(result.vote_count),
            rank_distribution(result),
        )

    if not results:
        console.print(f"[yellow]No items match heuristic {heuristic.value}.[/yellow]")
        return
    console.print(table)


def render_matrix(console: Console, bundle: ConsensusBundle) -> None:
    matrix = bundle.ranking_matrix
    table = Table(title="Ranking Matrix", show_lines=False)
    table.add_column("Expert", style="bold cyan")
    for item in matrix.items:
        table.add_column(item.title, justify="center")

    usable = {tuple(row) for row in bundle.usable_rows}
    for expert_id, row in zip(matrix.expert_ids, matrix.rows):
        style = None if tuple(row) in usable else "dim"
        table.add_row(
            expert_id,
            *[str(rank) if rank else "·" for rank in row],
            style=style,
        )
    console.print(table)


def render_reference(console: Console, bundle: ConsensusBundle) -> None:
    if not bundle.reference_ranking:
        return
    lines = [f"[bold]Reference ranking:[/bold] {bundle.reference_ranking}"]
    for row, distance in zip(bundle.usable_rows, bundle.distances):
        lines.append(f"  {row} → Cook distance [cyan]{distance}[/cyan]")
    console.print(Panel("\n".join(lines), title="Random Reference", border_style="dim"))


def render_medians(console: Console, bundle: ConsensusBundle) -> None:
    if bundle.medians is None:
        return

    for method in RankingMethod:
        result = bundle.medians.get(method)
        orderings = bundle.item_rankings.get(method)

        table = Table(
            title=f"{METHOD_LABELS[method]}: distance {result.distance}",
            caption=METHOD_DESCRIPTIONS[method],
        )
        table.add_column("Position", justify="right", style="dim")
        ties = len(orderings)
        for variant in range(1, ties + 1):
            header = "Ranking" if ties == 1 else f"Tie {variant}"
            table.add_column(header)

        size = len(orderings[0]) if orderings else 0
        for position in range(size):
            table.add_row(
                str(position + 1),
                *[ordering[position].title for ordering in orderings],
            )
        console.print(table)


def render_statistics(console: Console, stats: ConsensusStatistics) -> None:
    summary = Table(title="Consensus Statistics", show_header=False, show_lines=True)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value")
    summary.add_row(
        "Top position agreement",
        f"{stats.top_position_agreement} / {stats.total_methods} methods",
    )
    summary.add_row("Top 3 agreement", f"{stats.top3_agreement} / {stats.total_methods} methods")
    for method in RankingMethod:
        summary.add_row(
            f"{METHOD_LABELS[method]} distance",
            f"{stats.distances.get(method, 0)} ({stats.tie_counts.get(method, 0)} tied)",
        )
    console.print(summary)

    if not stats.leaders:
        return
    leaders = Table(title="Top Items Across Methods")
    leaders.add_column("Title", style="bold")
    for rank in (1, 2, 3):
        leaders.add_column(_ORDINALS[rank], justify="right", style=_RANK_STYLES[rank])
    for appearance in stats.leaders:
        leaders.add_row(
            appearance.item.title,
            *[str(appearance.counts[rank]) for rank in (1, 2, 3)],
        )
    console.print(leaders)


def render_notices(console: Console, notices: list[str]) -> None:
    for notice in notices:
        console.print(f"[yellow]![/yellow] {notice}")
