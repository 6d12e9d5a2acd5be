import logging

import httpx
from pydantic import ValidationError

from stay_search.exceptions.custom import DataStoreError
from stay_search.schemas.listing import ListingCandidate
from stay_search.schemas.pricing import PricingMatrix
from stay_search.services.batching import gather_in_batches

logger = logging.getLogger(__name__)

LISTINGS_PATH = "/listings"


class PricingStoreService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        access_token: str = "",
        batch_size: int = 40,
    ):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._batch_size = batch_size
        self._headers = {"Content-Type": "application/json"}
        if access_token:
            self._headers["Authorization"] = f"Bearer {access_token}"

    async def get_matrix(self, listing_id: str) -> PricingMatrix | None:
        resp = await self._client.get(
            f"{self._base_url}{LISTINGS_PATH}/{listing_id}/pricing-matrix",
            headers=self._headers,
        )

        if resp.status_code == 404:
            return None
        if resp.status_code >= 400:
            raise DataStoreError(resp.text, status_code=resp.status_code)

        data = resp.json()
        data.setdefault("listingId", listing_id)
        return PricingMatrix(**data)

    async def fetch_matrices(
        self, listings: list[ListingCandidate]
    ) -> dict[str, PricingMatrix]:
        """Pricing matrix per listing id; listings without a usable matrix are absent."""

        async def fetch(listing: ListingCandidate) -> PricingMatrix | None:
            return await self.get_matrix(listing.listing_id)

        outcomes = await gather_in_batches(listings, fetch, self._batch_size)

        matrices: dict[str, PricingMatrix] = {}
        for listing, outcome in outcomes:
            if isinstance(outcome, ValidationError):
                logger.error("Malformed pricing matrix for %s", listing.listing_id)
            elif isinstance(outcome, Exception):
                logger.error(
                    "Pricing lookup failed for %s: %s", listing.listing_id, outcome
                )
            elif outcome is None:
                logger.info("No pricing matrix for %s", listing.listing_id)
            else:
                matrices[listing.listing_id] = outcome
        return matrices
