from enum import StrEnum

from pydantic import ConfigDict, Field

from stay_search.schemas.base import BilingualText, CamelModel


class ParkingType(StrEnum):
    no_parking = "NO_PARKING"
    free = "FREE"
    paid = "PAID"


class CheckInType(StrEnum):
    self_checkin = "SELF_CHECKIN"
    host_greeting = "HOST_GREETING"
    lockbox = "LOCKBOX"
    doorman = "DOORMAN"


class PropertyType(StrEnum):
    apartment = "APARTMENT"
    house = "HOUSE"
    villa = "VILLA"
    studio = "STUDIO"
    room = "ROOM"


class ListingCandidate(CamelModel):
    model_config = ConfigDict(frozen=True)

    listing_id: str
    host_id: str
    location_id: str | None = None
    name: str
    short_description: BilingualText = BilingualText()
    thumbnail_url: str | None = None
    place_name: str | None = None
    region_name: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    max_guests: int
    bedrooms: int = 0
    single_beds: int = 0
    double_beds: int = 0
    bathrooms: int = 0

    pets_allowed: bool = False
    has_wifi: bool = Field(default=False, alias="hasWIFI")
    has_air_conditioning: bool = False
    has_parking: bool = False
    has_gym: bool = False
    has_pool: bool = False
    has_workspace: bool = False

    # Stored as enum keys; unknown values are kept so filters simply never match them.
    parking_type: str | None = None
    check_in_type: str | None = None
    property_type: str | None = None

    min_booking_nights: int | None = None
    max_booking_nights: int | None = None
    advance_booking_days: int | None = None

    instant_book: bool = False
    host_verified: bool = False
    listing_verified: bool = False
    official_star_rating: int | None = None


class ListingPage(CamelModel):
    items: list[ListingCandidate] = []
    last_evaluated_key: dict | None = None
