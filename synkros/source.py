import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import DatabaseError, connections

from .exceptions import SourceUnavailableError
from .transformer import clean_text, deduplicate, normalize_price, product_from_row

logger = logging.getLogger(__name__)

SOURCE_ALIAS = 'catalog'


@dataclass
class ProductDetail:
    photo: bytes
    name: str
    price: float


class CatalogSource:
    """
    Read-only access to the authoritative product table.

    Two independent reads are exposed: the bulk listing and the per-product
    detail (photo blob plus current name and price). They are not wrapped in a
    transaction, so the detail may reflect changes made after the listing.
    """

    def __init__(self, alias: str = SOURCE_ALIAS):
        self._alias = alias
        self._table = settings.CATALOG_SOURCE_TABLE
        self._columns = settings.CATALOG_SOURCE_COLUMNS

    @property
    def connection(self):
        return connections[self._alias]

    def check_connection(self):
        try:
            self.connection.ensure_connection()
        except DatabaseError as exc:
            raise SourceUnavailableError(
                f"Cannot connect to catalog database '{self._alias}': {exc}"
            ) from exc

    def list_products(self) -> list[dict]:
        cols = self._columns
        query = (
            f"SELECT {cols['code']}, {cols['name']}, {cols['price']}, {cols['owner']} "
            f"FROM {self._table}"
        )
        logger.info("Fetching products from the catalog source...")
        with self.connection.cursor() as cursor:
            cursor.execute(query)
            rows = cursor.fetchall()

        products = deduplicate(product_from_row(row) for row in rows)
        logger.info("Fetched %d products.", len(products))
        return products

    def fetch_detail(self, code: str) -> ProductDetail:
        """Fetch photo bytes, name and price for one product; LookupError if it vanished."""
        cols = self._columns
        query = (
            f"SELECT {cols['photo']}, {cols['name']}, {cols['price']} "
            f"FROM {self._table} WHERE {cols['code']} = %s"
        )
        with self.connection.cursor() as cursor:
            cursor.execute(query, [code])
            row = cursor.fetchone()

        if row is None:
            raise LookupError(f"Product {code} no longer exists in the catalog source.")

        photo, name, price = row
        return ProductDetail(
            photo=bytes(photo) if photo else b'',
            name=clean_text(name),
            price=normalize_price(price),
        )
