"""Artist Reads — artist with the releases they are credited on."""

from beesides.core.domain_types import Table
from beesides.core.errors import NotFoundError
from beesides.core.repository_protocols import Row, TableStore
from beesides.services.releases import optional_rows, order_by_ids

RELEASE_SUMMARY_COLUMNS = "id, title, release_type, release_date, cover_art_url"


async def get_artist_with_releases(store: TableStore, artist_id: str) -> Row:
    """Artist row plus `releases`, each carrying the artist's role on it."""
    artist = await store.select_one(Table.ARTISTS, {"id": artist_id})
    if not artist:
        raise NotFoundError("Artist")

    links = await optional_rows(
        store.select_many(
            Table.ARTIST_RELEASES, {"artist_id": artist_id},
            columns="release_id, role",
        ),
        "artist_releases",
    )
    release_ids = [link["release_id"] for link in links]
    releases: list[Row] = []
    if release_ids:
        releases = await optional_rows(
            store.select_many(
                Table.RELEASES, {"id": release_ids}, columns=RELEASE_SUMMARY_COLUMNS,
            ),
            "releases",
        )
    roles = {link["release_id"]: link.get("role") for link in links}
    return {
        **artist,
        "releases": [
            {**release, "role": roles.get(release["id"])}
            for release in order_by_ids(releases, release_ids)
        ],
    }
