import logging

import httpx
from pydantic import ValidationError

from stay_search.exceptions.custom import DataStoreError
from stay_search.schemas.location import LocationVariant

logger = logging.getLogger(__name__)

SLUG_PATH = "/locations/slugs"
QUERY_PATH = "/locations/query"
PREFIX_QUERY_LIMIT = 20


class LocationService:
    def __init__(self, client: httpx.AsyncClient, base_url: str, access_token: str = ""):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        if access_token:
            self._headers["Authorization"] = f"Bearer {access_token}"

    async def resolve_slug(self, slug: str) -> str | None:
        """Location id for a human-readable slug, or None if unknown."""
        resp = await self._client.get(
            f"{self._base_url}{SLUG_PATH}/{slug.lower()}", headers=self._headers
        )

        if resp.status_code == 404:
            logger.info("Unknown location slug: %s", slug)
            return None
        if resp.status_code >= 400:
            raise DataStoreError(resp.text, status_code=resp.status_code)

        location_id = resp.json().get("locationId")
        if not location_id:
            return None
        return location_id

    async def search_by_prefix(self, prefix: str) -> list[LocationVariant]:
        """Name variants whose normalized search name starts with ``prefix``."""
        payload = {"prefix": prefix, "limit": PREFIX_QUERY_LIMIT}
        resp = await self._client.post(
            f"{self._base_url}{QUERY_PATH}", json=payload, headers=self._headers
        )

        if resp.status_code >= 400:
            raise DataStoreError(resp.text, status_code=resp.status_code)

        variants: list[LocationVariant] = []
        for raw in resp.json().get("items", []):
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object location entry for prefix %r", prefix)
                continue
            try:
                variants.append(LocationVariant(**raw))
            except ValidationError:
                logger.warning(
                    "Skipping malformed location variant %s for prefix %r",
                    raw.get("locationId"), prefix,
                )
        return variants
