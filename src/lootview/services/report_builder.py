"""Drop chance computation and text rendering of tier reports."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from lootview.domain.defs import LootTable
from lootview.domain.tier_report import EntryFailure, TierReport

from .errors import ResolutionError
from .name_resolver import NameResolver, display_text

UNRESOLVED_LABEL = "<unresolved>"
HEADER_WIDTH = 90
WEIGHT_COLUMN = 20
CHANCE_COLUMN = 30


@dataclass(slots=True)
class ReportRowView:
    weight: float
    percentage: float
    text: str
    depth: int = 0


@dataclass(slots=True)
class TableReportView:
    name: str
    rows: List[ReportRowView] = field(default_factory=list)


@dataclass(slots=True)
class TierReportView:
    tier: str
    tables: List[TableReportView] = field(default_factory=list)
    failures: List[EntryFailure] = field(default_factory=list)


def drop_percentages(table: LootTable) -> List[float]:
    """Return ``weight / total * 100`` per entry; all zeros when the total is zero."""
    total = table.total_weight
    if total == 0:
        return [0.0 for _ in table.entries]
    return [entry.weight / total * 100.0 for entry in table.entries]


def format_weight(weight: float) -> str:
    if weight.is_integer():
        return str(int(weight))
    return repr(weight)


def format_percentage(percentage: float) -> str:
    return f"{percentage:.2f}%"


def format_table_header(name: str) -> str:
    return f"{name:=^{HEADER_WIDTH}}"


def format_column_header() -> str:
    return f"{'Weight':<{WEIGHT_COLUMN}}{'Chance':<{CHANCE_COLUMN}}Loot"


def format_row(row: ReportRowView) -> str:
    indent = "  " * row.depth
    weight = format_weight(row.weight)
    chance = format_percentage(row.percentage)
    return f"{weight:<{WEIGHT_COLUMN}}{chance:<{CHANCE_COLUMN}}{indent}{row.text}".rstrip()


class ReportBuilder:
    """Builds display rows for each table of a tier, in listing order."""

    def __init__(self, resolver: NameResolver, *, strict: bool = False) -> None:
        self._resolver = resolver
        self._strict = strict

    def build(self, report: TierReport) -> TierReportView:
        view = TierReportView(tier=report.tier, failures=list(report.failures))
        for tier_table in report.tables:
            chain = (tier_table.asset_path,) if tier_table.asset_path else ()
            rows = self._build_rows(tier_table.table, chain, 0, view.failures)
            view.tables.append(TableReportView(name=tier_table.name, rows=rows))
        return view

    def _build_rows(
        self,
        table: LootTable,
        chain: Tuple[str, ...],
        depth: int,
        failures: List[EntryFailure],
    ) -> List[ReportRowView]:
        rows: List[ReportRowView] = []
        for entry, percentage in zip(table.entries, drop_percentages(table)):
            try:
                resolved = self._resolver.resolve(entry.reference, chain, depth)
            except ResolutionError as exc:
                if self._strict:
                    raise
                failures.append(EntryFailure(exc.path, exc))
                text = display_text(entry.reference, f"{UNRESOLVED_LABEL} {exc.path}")
                rows.append(ReportRowView(entry.weight, percentage, text, depth))
                continue
            rows.append(ReportRowView(entry.weight, percentage, resolved.label, depth))
            if resolved.nested is not None and resolved.nested_path is not None:
                rows.extend(
                    self._build_rows(resolved.nested, (*chain, resolved.nested_path), depth + 1, failures)
                )
        return rows

    def render(self, report: TierReport) -> str:
        """Render every table of ``report`` as text."""
        return render_view(self.build(report))


def render_view(view: TierReportView) -> str:
    lines: List[str] = []
    for table in view.tables:
        lines.append(format_table_header(table.name))
        lines.append("")
        lines.append(format_column_header())
        lines.extend(format_row(row) for row in table.rows)
    if view.failures:
        lines.append("")
        lines.append(f"{len(view.failures)} failure(s):")
        lines.extend(f"- {failure.describe()}" for failure in view.failures)
    return "\n".join(lines)
