import pytest
from django.db import DatabaseError

from synkros.source import ProductDetail

BASE_URL = 'https://ingest.fake-catalog.test'


class FakeSource:
    """In-memory stand-in for CatalogSource."""

    def __init__(self, products, details, failing=(), listing_error=None, detail_error=None):
        self.products = products
        self.details = details
        self.failing = set(failing)
        self.listing_error = listing_error
        self.detail_error = detail_error or DatabaseError('connection reset by peer')
        self.detail_reads = []

    def list_products(self):
        if self.listing_error is not None:
            raise self.listing_error
        return [dict(p) for p in self.products]

    def fetch_detail(self, code):
        self.detail_reads.append(code)
        if code in self.failing:
            raise self.detail_error
        return self.details[code]


def make_product(code, name='Widget', price=10.0, owner='admin'):
    return {
        'code': code,
        'name': name,
        'price': price,
        'owner': owner,
        'assets': [],
        'photo_size': 0,
    }


def make_detail(name='Widget', price=10.0, photo=b''):
    return ProductDetail(photo=photo, name=name, price=price)


@pytest.fixture(autouse=True)
def override_settings(settings, tmp_path):
    settings.INGESTION_API_BASE_URL = BASE_URL
    settings.INGESTION_API_KEY = 'synkros-secret-token'
    settings.INGESTION_TIMEOUT = 5
    settings.ASSET_STAGING_DIR = str(tmp_path / 'staging')
