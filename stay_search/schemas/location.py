from stay_search.schemas.base import CamelModel


class LocationVariant(CamelModel):
    """One searchable name variant of a location."""

    location_id: str
    name: str
    search_name: str
    listings_count: int = 0
