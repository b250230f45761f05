"""
Fixed-width text table for the comparison matrix.

    +----------------+----------------------+----------------------+
    | Product        | PROD                 | TEST                 |
    +----------------+----------------------+----------------------+
    | Banner General | 9.3.12               | 9.3.12               |
    |                |                      | 9.3.13               |
    +----------------+----------------------+----------------------+

Values are left-justified and never truncated.
"""

from __future__ import annotations

from pendingreleases.domain.comparison import ComparisonMatrix

INSTANCE_COLUMN_WIDTH = 20
PRODUCT_HEADING = "Product"


def _border(product_width: int, columns: int, column_width: int) -> str:
    return "+-" + "-" * product_width + "-+" + ("-" + "-" * column_width + "-+") * columns


def _line(first: str, cells: tuple[str, ...] | list[str], product_width: int, column_width: int) -> str:
    return "| " + first.ljust(product_width) + " |" + "".join(
        " " + cell.ljust(column_width) + " |" for cell in cells
    )


def render_table(
    matrix: ComparisonMatrix,
    product_width: int,
    column_width: int = INSTANCE_COLUMN_WIDTH,
) -> list[str]:
    """
    Render the matrix as bordered fixed-width text lines.

    Args:
        matrix: Comparison matrix to display
        product_width: Width of the product name column
        column_width: Width of each instance column

    Returns:
        Table lines (without trailing newlines)
    """
    columns = len(matrix.labels)
    border = _border(product_width, columns, column_width)

    lines = [
        border,
        _line(PRODUCT_HEADING, matrix.labels, product_width, column_width),
        border,
    ]

    for row in matrix.rows:
        for i, sub_row in enumerate(row.sub_rows):
            lines.append(_line(row.product if i == 0 else "", sub_row, product_width, column_width))
        lines.append(border)

    return lines
