import logging
from datetime import date

import httpx

from stay_search.exceptions.custom import DataStoreError
from stay_search.schemas.listing import ListingCandidate
from stay_search.services.batching import gather_in_batches

logger = logging.getLogger(__name__)

QUERY_PATH = "/availability/query"


class AvailabilityService:
    """Blocked-date index: one record per listing per blocked night."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, access_token: str = ""):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        if access_token:
            self._headers["Authorization"] = f"Bearer {access_token}"

    async def has_blocked_dates(self, listing_id: str, start: date, end: date) -> bool:
        """True if any night in the closed range ``[start, end]`` is blocked."""
        payload = {
            "listingId": listing_id,
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "limit": 1,
        }
        resp = await self._client.post(
            f"{self._base_url}{QUERY_PATH}", json=payload, headers=self._headers
        )

        if resp.status_code >= 400:
            raise DataStoreError(resp.text, status_code=resp.status_code)

        return len(resp.json().get("items", [])) > 0


class AvailabilityChecker:
    def __init__(self, availability: AvailabilityService, batch_size: int = 40):
        self._availability = availability
        self._batch_size = batch_size

    async def filter_available(
        self,
        listings: list[ListingCandidate],
        check_in: date,
        last_night: date,
    ) -> list[ListingCandidate]:
        """Listings with no blocked night between check-in and the last night.

        A listing whose probe fails is left out.
        """

        async def probe(listing: ListingCandidate) -> bool:
            return await self._availability.has_blocked_dates(
                listing.listing_id, check_in, last_night
            )

        outcomes = await gather_in_batches(listings, probe, self._batch_size)

        available: list[ListingCandidate] = []
        for listing, outcome in outcomes:
            if isinstance(outcome, Exception):
                logger.error(
                    "Availability check failed for %s: %s", listing.listing_id, outcome
                )
                continue
            if not outcome:
                available.append(listing)
        return available
