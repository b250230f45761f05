"""
Release reconciliation.

Computes, per product and per instance, which catalog releases have not been
applied yet:

    pending = catalog releases - (GURWADB | GURWAPP | decoded GURPOST | *VERS)

Results are compared by exact string equality and sorted lexicographically,
so "9.10" sorts before "9.2". That ordering is what the existing reports show.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from pendingreleases.domain.catalog import ProductDescriptor
from pendingreleases.domain.errors import MalformedPatchIdError
from pendingreleases.domain.patch_decoder import decode_patch_id

logger = logging.getLogger(__name__)

# Single blank row shown for a product with nothing pending
PLACEHOLDER: tuple[str, ...] = ("",)


class ReleaseSource(Protocol):
    """Anything that can report the version strings it holds for a product key."""

    name: str

    def fetch(self, product_key: str) -> Sequence[str]:
        ...


@dataclass(frozen=True)
class InstanceSources:
    """The four applied-release sources of one Banner instance."""

    deployed_database: ReleaseSource
    deployed_application: ReleaseSource
    patch_log: ReleaseSource
    version_table: ReleaseSource


@dataclass
class InstanceReport:
    """Pending releases of every reconciled product for one instance."""

    label: str
    pending: dict[str, list[str]] = field(default_factory=dict)

    @property
    def products(self) -> list[str]:
        return list(self.pending)

    def get(self, product_name: str) -> list[str] | None:
        return self.pending.get(product_name)

    @property
    def pending_count(self) -> int:
        """Number of real pending versions (placeholders not counted)."""
        return sum(1 for versions in self.pending.values() for v in versions if v)


def reconcile(
    master: Iterable[str] | None,
    applied_sets: Iterable[Iterable[str]],
) -> list[str] | None:
    """
    Remove every applied version from the master catalog versions.

    Args:
        master: Catalog versions, or None when the catalog was never queried
        applied_sets: Version collections from the applied sources. Patch
            identifiers must already be decoded.

    Returns:
        Sorted, de-duplicated pending versions; [""] when nothing is pending;
        None when master is None (the product gets no report entry).
    """
    if master is None:
        return None

    applied: set[str] = set()
    for versions in applied_sets:
        applied.update(versions)

    pending = sorted(set(master) - applied)
    if not pending:
        return list(PLACEHOLDER)
    return pending


def reconcile_product(
    product: ProductDescriptor,
    catalog_source: ReleaseSource,
    sources: InstanceSources,
) -> list[str] | None:
    """
    Query all sources for one product and reconcile the results.

    Sources whose identifier is empty for this product are not queried.
    Returns None (and queries nothing) when the product has no catalog key.
    """
    if not product.catalog_key:
        logger.debug("Skipping %s: no catalog key", product.name)
        return None

    master = catalog_source.fetch(product.catalog_key)
    applied: list[Sequence[str]] = []

    if product.deployed_db_key:
        applied.append(sources.deployed_database.fetch(product.deployed_db_key))

    if product.deployed_app_key:
        applied.append(sources.deployed_application.fetch(product.deployed_app_key))

    if product.patch_key:
        patches = sources.patch_log.fetch(product.patch_key)
        try:
            applied.append([decode_patch_id(raw, product.patch_key) for raw in patches])
        except MalformedPatchIdError as e:
            raise MalformedPatchIdError(
                e.raw_patch_id, e.reason, source=sources.patch_log.name, product=product.name
            ) from e

    if product.version_table:
        applied.append(sources.version_table.fetch(product.version_table))

    pending = reconcile(master, applied)
    logger.debug(
        "%s: %d catalog, %d applied source(s), pending=%s",
        product.name, len(master), len(applied), pending,
    )
    return pending


def build_instance_report(
    label: str,
    products: Iterable[ProductDescriptor],
    catalog_source: ReleaseSource,
    sources: InstanceSources,
) -> InstanceReport:
    """
    Reconcile every product for one instance.

    Products are processed, and appear in the report, in the given order.
    Any source error propagates; no partial report is returned.
    """
    report = InstanceReport(label=label)

    for product in products:
        pending = reconcile_product(product, catalog_source, sources)
        if pending is not None:
            report.pending[product.name] = pending

    logger.info(
        "Instance %s: %d product(s), %d pending release(s)",
        label, len(report.pending), report.pending_count,
    )
    return report
