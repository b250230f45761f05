"""
Side-by-side comparison of instance reports.

Rows are keyed by the products of the first report. Within a row, the pending
versions of each instance are lined up by position only: sub-row i shows the
i-th pending version of every instance, padded with "" where an instance has
fewer. Two versions on the same line are not claimed to correspond.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pendingreleases.domain.reconciliation import PLACEHOLDER, InstanceReport

MAX_INSTANCES = 3


@dataclass(frozen=True)
class MatrixRow:
    """One product and its pending versions per active instance."""

    product: str
    cells: tuple[tuple[str, ...], ...]

    @property
    def height(self) -> int:
        return max((len(cell) for cell in self.cells), default=0)

    @property
    def sub_rows(self) -> list[tuple[str, ...]]:
        """Positionally aligned display lines, one value per instance."""
        return [
            tuple(cell[i] if i < len(cell) else "" for cell in self.cells)
            for i in range(self.height)
        ]


@dataclass(frozen=True)
class ComparisonMatrix:
    labels: tuple[str, ...]
    rows: tuple[MatrixRow, ...]

    def __len__(self) -> int:
        return len(self.rows)


def build_comparison_matrix(reports: Sequence[InstanceReport]) -> ComparisonMatrix:
    """
    Combine one to three instance reports into a comparison matrix.

    Args:
        reports: Instance reports in configured order (1, 2, 3)

    Returns:
        ComparisonMatrix with one row per product of the first report

    Raises:
        ValueError: If fewer than one or more than three reports are given
    """
    if not 1 <= len(reports) <= MAX_INSTANCES:
        raise ValueError(f"Expected 1 to {MAX_INSTANCES} instance reports, got {len(reports)}")

    first = reports[0]
    rows = []
    for product, versions in first.pending.items():
        cells = [tuple(versions)]
        for report in reports[1:]:
            other = report.get(product)
            cells.append(tuple(other) if other is not None else PLACEHOLDER)
        rows.append(MatrixRow(product=product, cells=tuple(cells)))

    return ComparisonMatrix(
        labels=tuple(report.label for report in reports),
        rows=tuple(rows),
    )
