"""
Product selection menu.

The user picks one product by index, "a" for all products, or "q" to quit.
Anything else aborts the run; there is no re-prompt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pendingreleases.domain.catalog import ProductCatalog, ProductDescriptor

INVALID_SELECTION_MESSAGE = "Invalid selection. Please choose a value from the list."


class SelectionKind(Enum):
    ALL = "all"
    PRODUCT = "product"
    QUIT = "quit"
    INVALID = "invalid"


@dataclass(frozen=True)
class Selection:
    kind: SelectionKind
    index: int | None = None

    @property
    def is_runnable(self) -> bool:
        return self.kind in (SelectionKind.ALL, SelectionKind.PRODUCT)


def parse_selection(text: str, catalog_size: int) -> Selection:
    """
    Interpret the user's menu input.

    Args:
        text: Raw input ("a", "q" or a 0-based index)
        catalog_size: Number of products in the menu

    Returns:
        Selection (INVALID for out-of-range or unparseable input)
    """
    choice = text.strip().lower()

    if choice == "a":
        return Selection(SelectionKind.ALL)
    if choice == "q":
        return Selection(SelectionKind.QUIT)

    try:
        index = int(choice)
    except ValueError:
        return Selection(SelectionKind.INVALID)

    if index < 0 or index >= catalog_size:
        return Selection(SelectionKind.INVALID)
    return Selection(SelectionKind.PRODUCT, index)


def selected_products(selection: Selection, catalog: ProductCatalog) -> list[ProductDescriptor]:
    """Products to reconcile for a runnable selection, in catalog order."""
    if selection.kind is SelectionKind.ALL:
        return list(catalog)
    if selection.kind is SelectionKind.PRODUCT:
        return [catalog[selection.index]]
    raise ValueError(f"Selection {selection.kind.value} does not select products")


def product_column_width(selection: Selection, catalog: ProductCatalog) -> int:
    """
    Width of the product column.

    All products: the longest name in the whole catalog.
    One product: that product's own name length.
    """
    if selection.kind is SelectionKind.ALL:
        return catalog.longest_name_length()
    return len(selected_products(selection, catalog)[0].name)


def format_menu(catalog: ProductCatalog) -> list[str]:
    """Menu lines listing every product with its index."""
    lines = [f"\t[{i:2d}] {product.name}" for i, product in enumerate(catalog)]
    lines += [
        "",
        "\t[a] All of the above",
        "\t[q] Quit",
    ]
    return lines
