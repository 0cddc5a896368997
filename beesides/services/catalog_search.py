"""Catalog Search — free-text album search against the metadata provider."""

from beesides.core.errors import ValidationFailedError
from beesides.core.repository_protocols import MetadataProvider

MAX_SEARCH_LIMIT = 100


async def search_albums(
    provider: MetadataProvider, query: str | None, limit: int = 10, offset: int = 0,
) -> dict:
    """Provider search results, passed through unchanged."""
    query = (query or "").strip()
    if not query:
        raise ValidationFailedError("Search query is required", "query")
    if not 1 <= limit <= MAX_SEARCH_LIMIT:
        raise ValidationFailedError(
            f"limit must be between 1 and {MAX_SEARCH_LIMIT}", "limit",
        )
    if offset < 0:
        raise ValidationFailedError("offset must not be negative", "offset")
    return await provider.search_release_groups(query, limit=limit, offset=offset)


async def get_album(provider: MetadataProvider, mbid: str | None) -> dict:
    mbid = (mbid or "").strip()
    if not mbid:
        raise ValidationFailedError("Release group ID is required", "id")
    return await provider.get_release_group(mbid)
