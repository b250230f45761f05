"""
Tests for the fixed-width comparison table.
"""

from pendingreleases.domain.comparison import build_comparison_matrix
from pendingreleases.domain.reconciliation import InstanceReport
from pendingreleases.interface.table_renderer import render_table


def test_single_instance_single_product():
    """Test borders, heading and a one-line row."""
    matrix = build_comparison_matrix([
        InstanceReport("PROD", {"Banner Student": ["8.17.0.2"]}),
    ])

    lines = render_table(matrix, len("Banner Student"))

    border = "+----------------+----------------------+"
    assert lines == [
        border,
        "| Product        | PROD                 |",
        border,
        "| Banner Student | 8.17.0.2             |",
        border,
    ]


def test_multi_line_rows_show_name_once():
    """Test that only the first sub-row carries the product name."""
    matrix = build_comparison_matrix([
        InstanceReport("PROD", {"General": ["9.3.12"]}),
        InstanceReport("TEST", {"General": ["9.3.12", "9.3.13"]}),
    ])

    lines = render_table(matrix, 7, column_width=6)

    border = "+---------+--------+--------+"
    assert lines == [
        border,
        "| Product | PROD   | TEST   |",
        border,
        "| General | 9.3.12 | 9.3.12 |",
        "|         |        | 9.3.13 |",
        border,
    ]


def test_long_values_not_truncated():
    """Test that values wider than the column push the border out."""
    matrix = build_comparison_matrix([
        InstanceReport("PROD", {"X": ["1.2.3"]}),
    ])

    lines = render_table(matrix, 1, column_width=3)

    assert lines[3] == "| X | 1.2.3 |"
    assert lines[0] == "+---+-----+"


def test_nothing_pending_renders_blank_cells():
    """Test a product with nothing pending and a missing product."""
    matrix = build_comparison_matrix([
        InstanceReport("PROD", {"A": [""]}),
        InstanceReport("TEST", {}),
    ])

    lines = render_table(matrix, 1, column_width=4)

    assert lines[3] == "| A |      |      |"
    assert len(lines) == 5
