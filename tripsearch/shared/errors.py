"""
Error types shared across the search pipeline.

Generation errors are absorbed by the stage that raised them (empty
result list or deterministic fallback). Store errors are not absorbed
and fail the whole search.
"""


class GenerationError(Exception):
    """Raised when the generative service cannot produce a usable object."""

    pass


class SchemaValidationError(GenerationError):
    """Raised when generated output does not conform to the target schema."""

    pass


class StoreError(Exception):
    """Raised when the record store cannot complete an operation."""

    pass


class SearchNotFoundError(StoreError):
    """Raised when a search id has no record in the store."""

    def __init__(self, search_id: str):
        self.search_id = search_id
        super().__init__(f"Search not found: {search_id}")
