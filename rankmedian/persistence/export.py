"""Consensus result export formatters.

Provides CSV, JSON and Markdown exports of a ConsensusBundle. The CSV
layout has one row per (method, position, item).
"""

from __future__ import annotations

import csv
import io

from rankmedian.schemas.ranking import (
    METHOD_LABELS,
    ConsensusBundle,
    ExportRecord,
    RankingMethod,
)

CSV_HEADER = ["Method", "Position", "Title", "Artist", "Genre"]


def export_records(bundle: ConsensusBundle, *, all_ties: bool = False) -> list[ExportRecord]:
    """Flatten the bundle's item rankings into export rows.

    Args:
        bundle: A completed consensus run.
        all_ties: Export every tied ranking instead of only the first
            one per method.
    """
    records: list[ExportRecord] = []
    for method in RankingMethod:
        orderings = bundle.item_rankings.get(method)
        if not all_ties:
            orderings = orderings[:1]
        for variant, ordering in enumerate(orderings, start=1):
            for position, item in enumerate(ordering, start=1):
                records.append(
                    ExportRecord(
                        method=method,
                        variant=variant,
                        position=position,
                        title=item.title,
                        artist=item.artist,
                        genre=item.genre,
                    )
                )
    return records


def export_csv(bundle: ConsensusBundle, *, all_ties: bool = False) -> str:
    """Export median rankings as CSV.

    With ``all_ties`` a ``Variant`` column identifies the tied ranking
    each row belongs to.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER + (["Variant"] if all_ties else []))
    for record in export_records(bundle, all_ties=all_ties):
        row = [record.method.value, record.position, record.title, record.artist, record.genre]
        if all_ties:
            row.append(record.variant)
        writer.writerow(row)
    return buffer.getvalue()


def export_json(bundle: ConsensusBundle) -> str:
    """Export the full bundle as pretty-printed JSON."""
    return bundle.model_dump_json(indent=2)


def export_markdown(bundle: ConsensusBundle) -> str:
    """Export a human-readable Markdown report of a consensus run."""
    lines: list[str] = []

    lines.append(f"# Consensus Report: {bundle.heuristic.value}")
    lines.append("")

    matrix = bundle.ranking_matrix
    lines.append("## Metadata")
    lines.append("")
    lines.append(f"- **Heuristic:** {bundle.heuristic.value}")
    lines.append(f"- **Filtered Items:** {len(bundle.filtered_items)}")
    lines.append(f"- **Matrix:** {len(matrix.rows)} experts × {matrix.size} items")
    lines.append(f"- **Rankings Searched:** {len(bundle.usable_rows)}")
    if matrix.truncated:
        dropped = ", ".join(item.title for item in matrix.dropped_items)
        lines.append(f"- **Dropped Items:** {dropped}")
    lines.append("")

    if bundle.notices:
        lines.append("## Notices")
        lines.append("")
        for notice in bundle.notices:
            lines.append(f"- {notice}")
        lines.append("")

    if bundle.medians is None:
        lines.append("*No consensus rankings available.*")
        lines.append("")
        return "\n".join(lines)

    lines.append("## Median Rankings")
    lines.append("")
    for method in RankingMethod:
        result = bundle.medians.get(method)
        orderings = bundle.item_rankings.get(method)
        lines.append(f"### {METHOD_LABELS[method]}")
        lines.append("")
        lines.append(f"- **Distance:** {result.distance}")
        lines.append(f"- **Tied Rankings:** {len(result.rankings)}")
        lines.append("")
        if orderings:
            lines.append("| Position | Title | Artist | Genre |")
            lines.append("|----------|-------|--------|-------|")
            for position, item in enumerate(orderings[0], start=1):
                lines.append(f"| {position} | {item.title} | {item.artist} | {item.genre} |")
            lines.append("")

    lines.append("## Reference Ranking")
    lines.append("")
    lines.append(f"- **Ranking:** {bundle.reference_ranking}")
    lines.append(f"- **Cook Distances:** {bundle.distances}")
    lines.append("")

    return "\n".join(lines)
