import logging
from typing import Any

import httpx
from pydantic import ValidationError

from stay_search.exceptions.custom import DataStoreError
from stay_search.schemas.listing import ListingCandidate, ListingPage

logger = logging.getLogger(__name__)

QUERY_PATH = "/public-listings/query"


class ListingIndexService:
    """Reads the public listing index, partitioned by location."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, access_token: str = ""):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        if access_token:
            self._headers["Authorization"] = f"Bearer {access_token}"

    async def query_listings(
        self,
        location_id: str,
        min_guests: int,
        limit: int,
        start_key: dict[str, Any] | None = None,
    ) -> ListingPage:
        payload: dict[str, Any] = {
            "locationId": location_id,
            "minGuests": min_guests,
            "limit": limit,
        }
        if start_key:
            payload["exclusiveStartKey"] = start_key

        resp = await self._client.post(
            f"{self._base_url}{QUERY_PATH}", json=payload, headers=self._headers
        )

        if resp.status_code >= 400:
            raise DataStoreError(resp.text, status_code=resp.status_code)

        data = resp.json()
        items: list[ListingCandidate] = []
        for raw in data.get("items", []):
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object listing entry in location %s", location_id)
                continue
            try:
                items.append(ListingCandidate(**raw))
            except ValidationError:
                logger.warning(
                    "Skipping malformed listing %s in location %s",
                    raw.get("listingId"), location_id,
                )

        return ListingPage(items=items, last_evaluated_key=data.get("lastEvaluatedKey"))
