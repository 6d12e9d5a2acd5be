import unicodedata

from stay_search.schemas.location import LocationVariant
from stay_search.schemas.responses import LocationSummary

MAX_LOCATION_RESULTS = 10


def normalize_search_text(text: str) -> str:
    """Lower-case and strip diacritics ("Žabljak" -> "zabljak")."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.lower().strip()


def _prefer(candidate: LocationVariant, current: LocationVariant, query: str) -> bool:
    candidate_match = candidate.search_name.startswith(query)
    current_match = current.search_name.startswith(query)
    if candidate_match != current_match:
        return candidate_match
    return candidate.name < current.name


def rank_locations(
    variants: list[LocationVariant], query: str, limit: int = MAX_LOCATION_RESULTS
) -> list[LocationSummary]:
    """One entry per location, most listings first."""
    by_location: dict[str, LocationVariant] = {}
    for variant in variants:
        current = by_location.get(variant.location_id)
        if current is None or _prefer(variant, current, query):
            by_location[variant.location_id] = variant

    ranked = sorted(by_location.values(), key=lambda v: v.listings_count, reverse=True)
    return [LocationSummary(location_id=v.location_id, name=v.name) for v in ranked[:limit]]
