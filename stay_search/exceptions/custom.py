class SearchError(Exception):
    """Client-facing failure rendered as ``{"error": ..., "code": ...}``."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SearchValidationError(SearchError):
    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class LocationNotFoundError(SearchError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Location not found: {slug}")


class RateLimitExceededError(SearchError):
    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        super().__init__("Too many requests. Please try again later.")


class InternalError(SearchError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


class DataStoreError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class PricingDataError(Exception):
    def __init__(self, listing_id: str | None, message: str):
        self.listing_id = listing_id
        self.message = message
        super().__init__(f"{message} (listing={listing_id})")
