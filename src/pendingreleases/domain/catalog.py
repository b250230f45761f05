"""
Product catalog.

Defines the products that are checked for pending releases and, for each,
the identifier it is known by in every release source:

- catalog_key: PRODUCT_ID in the ESM RELEASE table (master catalog)
- patch_key: patch prefix used in GURPOST patch identifiers
- deployed_db_key: GURWADB_APPLICATION_NAME
- deployed_app_key: GURWAPP_APPLICATION_NAME
- version_table: legacy *VERS table name

An empty identifier means the product is never looked up in that source.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Iterable, Iterator, Sequence

from pendingreleases.domain.errors import ConfigurationError

# Version-table names are interpolated into SQL, so they must be plain identifiers
SQL_IDENTIFIER = re.compile(r"^[A-Za-z][A-Za-z0-9_$#]*$")


@dataclass(frozen=True)
class ProductDescriptor:
    """One product and its per-source identifiers."""

    name: str
    catalog_key: str = ""
    patch_key: str = ""
    deployed_db_key: str = ""
    deployed_app_key: str = ""
    version_table: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ConfigurationError("Product name cannot be empty")
        if self.version_table and not SQL_IDENTIFIER.match(self.version_table):
            raise ConfigurationError(
                f"Invalid version table name for {self.name}: {self.version_table!r}"
            )


class ProductCatalog:
    """
    Immutable, ordered collection of product descriptors.

    Catalog order is the iteration order used when all products are selected
    and the index order used by the selection menu.
    """

    def __init__(self, products: Iterable[ProductDescriptor]):
        self._products: tuple[ProductDescriptor, ...] = tuple(products)

        seen: set[str] = set()
        for product in self._products:
            if product.name in seen:
                raise ConfigurationError(f"Duplicate product name in catalog: {product.name}")
            seen.add(product.name)

    @classmethod
    def from_records(cls, records: Sequence[dict[str, Any]]) -> ProductCatalog:
        """
        Build a catalog from plain dictionaries (e.g. parsed JSON).

        Unknown keys are rejected so that a typo in a catalog file does not
        silently disable a source.
        """
        allowed = {f.name for f in fields(ProductDescriptor)}
        products = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise ConfigurationError(f"Catalog entry {index} is not an object")
            unknown = set(record) - allowed
            if unknown:
                raise ConfigurationError(
                    f"Catalog entry {index} has unknown fields: {', '.join(sorted(unknown))}"
                )
            if "name" not in record:
                raise ConfigurationError(f"Catalog entry {index} has no name")
            products.append(
                ProductDescriptor(**{k: str(v).strip() if v else "" for k, v in record.items()})
            )
        return cls(products)

    def __iter__(self) -> Iterator[ProductDescriptor]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __getitem__(self, index: int) -> ProductDescriptor:
        return self._products[index]

    def longest_name_length(self) -> int:
        """Length of the longest product name (0 for an empty catalog)."""
        return max((len(p.name) for p in self._products), default=0)


# Default Banner product table.
# Columns: friendly name, ESM product, GURPOST prefix, GURWADB name, GURWAPP name, *VERS table
_BANNER_PRODUCTS = [
    ("Banner 9x Database Upgrade", "BXE_DBU", "cxedb", "BannerDbUpgrade", "", ""),
    ("Banner Accounts Receivable", "BNR_AR", "tas", "", "AccountsReceivable", "TURVERS"),
    ("Banner Admin Common", "BNR_ADMCOM", "", "", "AdminCommon", ""),
    ("Banner Advancement", "BNR_ADV", "alu", "", "Advancement", "AURVERS"),
    ("Banner Advancement Self-Service 8", "BNR_ADVSS", "bwa", "", "", "BWAVERS"),
    ("Banner Application Navigator", "BXE_APPNAV", "appNav", "ApplicationNavigator", "ApplicationNavigator", ""),
    ("Banner Communication Management", "BXE_BCM", "bcm", "CommunicationManagement", "CommunicationManagement", ""),
    ("Banner Employee Self-Service 8", "BNR_EMPSS", "bwp", "", "", "BWPVERS"),
    ("Banner Employee Self-Service 9", "BXE_EMPSS", "ess", "EmployeeSelfService", "EmployeeSelfService", ""),
    ("Banner Extensibility", "BXE_BEXT", "bext", "BannerExtensibility", "BannerExtensibility", ""),
    ("Banner Faculty and Advisor Self-Service 8", "BNR_FACSS", "bwl", "", "", "BWLVERS"),
    ("Banner Faculty Self-Service 9", "BXE_FACSS", "", "FacultySelfService", "FacultySelfService", ""),
    ("Banner Finance", "BNR_FIN", "fin", "", "Finance", "FURVERS"),
    ("Banner Finance Self-Service 8", "BNR_FINSS", "fss", "", "", ""),
    ("Banner Finance Self-Service 9", "BXE_FINSS", "fss", "BannerFinanceSSB", "BannerFinanceSSB", ""),
    ("Banner Financial Aid", "BNR_FINAID", "res", "", "FinancialAid", "RURVERS"),
    ("Banner Financial Aid Self-Service 8", "BNR_FINAIDSS", "bwr", "", "", "BWRVERS"),
    ("Banner General", "BNR_GEN", "gen", "", "General", "GURVERS"),
    ("Banner General Self-Service", "BXE_GENSS", "", "BannerGeneralSsb", "BannerGeneralSsb", ""),
    ("Banner HR and Payroll", "BNR_HRPAY", "pay", "", "HumanResources", "PURVERS"),
    ("Banner Position Control", "BNR_POSCTL", "pos", "", "PositionControl", "NURVERS"),
    ("Banner Student", "BNR_STU", "stu", "", "Student", "SURVERS"),
    ("Banner Student eTranscript", "BXE_ETRANS", "", "eTranscript", "eTranscript", ""),
    ("Banner Student Self-Service 8", "BNR_STUSS", "bws", "", "", "BWSVERS"),
    ("Banner Student Self-Service 9", "BXE_STUSS2", "bsss", "StudentSelfService", "StudentSelfService", ""),
    ("Banner Student Registration Self-Service", "BXE_STUREGSSB", "regssb", "StudentRegistrationSsb", "StudentRegistrationSsb", ""),
    ("Banner Web General", "BNR_WEBGEN", "bwg", "", "", "BWGVERS"),
    ("Banner Web Tailor", "BNR_WEBTLR", "twb", "", "", "TWGRVERS"),
]

DEFAULT_CATALOG = ProductCatalog(ProductDescriptor(*row) for row in _BANNER_PRODUCTS)
