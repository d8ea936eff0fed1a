import logging
from pathlib import Path

import requests
from django.conf import settings

from .exceptions import AssetUploadError
from .transformer import to_wire

logger = logging.getLogger(__name__)

ACTION_METHODS = {
    'create': 'POST',
    'update': 'PUT',
    'delete': 'DELETE',
}


class IngestionClient:
    """
    Client for the downstream catalog ingestion service.

    Uploads are all-or-nothing: anything other than a 2xx carrying a numeric
    id raises AssetUploadError. Publishing never raises on remote failures;
    it logs them and reports False so the caller can leave the ledger alone.
    """

    def __init__(self):
        self._base_url = settings.INGESTION_API_BASE_URL.rstrip('/')
        self._timeout = settings.INGESTION_TIMEOUT
        self._session = requests.Session()
        api_key = getattr(settings, 'INGESTION_API_KEY', '')
        if api_key:
            self._session.headers.update({'X-Api-Key': api_key})

    def upload_asset(self, path) -> int:
        path = Path(path)
        url = f"{self._base_url}/products/uploadAsset"
        logger.info("Uploading asset from %s...", path)

        try:
            with path.open('rb') as fh:
                response = self._session.post(
                    url,
                    files={'file': (path.name, fh)},
                    timeout=self._timeout,
                )
        except (OSError, requests.RequestException) as exc:
            raise AssetUploadError(f"Upload of {path.name} failed: {exc}") from exc

        asset_id = self._parse_asset_id(response)
        if asset_id is None:
            logger.error("Asset upload for %s rejected (HTTP %d).", path.name, response.status_code)
            raise AssetUploadError(f"Upload of {path.name} failed.")

        logger.info("Asset uploaded successfully, id %d.", asset_id)
        return asset_id

    def publish(self, product: dict, action: str) -> bool:
        """Send a create/update/delete request for `product`; True on any 2xx."""
        try:
            method = ACTION_METHODS[action]
        except KeyError:
            raise ValueError(f"Unknown publish action: {action!r}") from None

        code = product['code']
        try:
            response = self._session.request(
                method,
                f"{self._base_url}/products",
                json=to_wire(product),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to publish product %s (%s): %s", code, action, exc)
            return False

        if not 200 <= response.status_code < 300:
            logger.error(
                "Ingestion service rejected product %s (%s): HTTP %d.",
                code, action, response.status_code,
            )
            return False

        logger.info("Product %s published (%s).", code, action)
        return True

    @staticmethod
    def _parse_asset_id(response: requests.Response):
        """Return the integer id from a successful upload response, or None."""
        if not 200 <= response.status_code < 300:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        asset_id = body.get('id')
        if isinstance(asset_id, bool) or not isinstance(asset_id, (int, float)):
            return None
        return int(asset_id)
