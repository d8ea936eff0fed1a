import logging
from typing import Iterable

logger = logging.getLogger(__name__)

# Field names the ingestion service expects in product payloads.
WIRE_FIELDS = {
    'code': 'CODIGO_PRODUCTO',
    'name': 'NOMBRE_PRODUCTO',
    'price': 'PREVTA1_PRODUCTO',
    'owner': 'AUTOR',
    'assets': 'FOTO',
    'photo_size': 'FOTO_LENGTH',
}


def clean_text(value) -> str:
    # CHAR columns come back right-padded with spaces.
    if value is None:
        return ''
    return str(value).strip()


def normalize_price(value) -> float:
    """Convert a source price to a float rounded to cents; non-numeric values count as 0."""
    try:
        return round(float(value), 2)
    except (TypeError, ValueError):
        logger.warning("Non-numeric price %r – treating as 0.", value)
        return 0.0


def product_from_row(row) -> dict:
    """Build a product dict from a (code, name, price, owner) source row."""
    code, name, price, owner = row
    return {
        'code': clean_text(code),
        'name': clean_text(name),
        'price': normalize_price(price),
        'owner': clean_text(owner),
        'assets': [],
        'photo_size': 0,
    }


def deduplicate(products: Iterable[dict]) -> list[dict]:
    """Drop repeated product codes (first occurrence wins)."""
    seen = {}
    for product in products:
        code = product['code']
        if code in seen:
            logger.warning("Duplicate product code %s – keeping first occurrence, skipping duplicate.", code)
        else:
            seen[code] = product
    return list(seen.values())


def to_wire(product: dict) -> dict:
    """Serialize a product dict into the ingestion service payload."""
    return {
        WIRE_FIELDS['code']: product['code'],
        WIRE_FIELDS['name']: product['name'],
        WIRE_FIELDS['price']: product['price'],
        WIRE_FIELDS['owner']: product.get('owner', ''),
        WIRE_FIELDS['assets']: list(product.get('assets') or []),
        WIRE_FIELDS['photo_size']: product.get('photo_size', 0),
    }
