"""AniList GraphQL API integration for anime catalog data."""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from src.config import get_settings
from src.constants import ANILIST_PAGE_SIZE, ANILIST_SCORE_TO_STARS
from src.utils.cache import CACHE_TTL_SHORT, cached
from src.utils.http_client import get_catalog_client
from src.utils.retry import retry_async

logger = logging.getLogger(__name__)

GENRE_SEARCH_QUERY = """
query ($genres: [String], $page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    media(type: ANIME, genre_in: $genres, sort: POPULARITY_DESC) {
      id
      title {
        romaji
        english
        native
        userPreferred
      }
      genres
      episodes
      description
      coverImage {
        large
      }
      averageScore
    }
  }
}
"""


class AniListError(Exception):
    """AniList request failed or returned an error payload."""

    pass


@dataclass(frozen=True)
class CatalogShow:
    """An anime as listed by the external catalog."""

    external_id: str
    title: str
    genres: tuple[str, ...] = field(default_factory=tuple)
    synopsis: str | None = None
    image_url: str | None = None
    average_score: float | None = None  # 0-100
    episodes: int | None = None

    @property
    def star_rating(self) -> float | None:
        """averageScore converted to the 5-star scale; unscored (0 or missing) gives None."""
        if not self.average_score:
            return None
        return self.average_score / ANILIST_SCORE_TO_STARS


def _pick_title(title: dict[str, Any] | None) -> str:
    title = title or {}
    return (
        title.get("userPreferred")
        or title.get("english")
        or title.get("romaji")
        or title.get("native")
        or ""
    )


def parse_media(media: dict[str, Any]) -> CatalogShow:
    """Convert one AniList ``Media`` object into a CatalogShow."""
    cover = media.get("coverImage") or {}
    return CatalogShow(
        external_id=str(media["id"]),
        title=_pick_title(media.get("title")),
        genres=tuple(media.get("genres") or ()),
        synopsis=media.get("description"),
        image_url=cover.get("large"),
        average_score=media.get("averageScore"),
        episodes=media.get("episodes"),
    )


class AniListService:
    """Client for the AniList GraphQL API."""

    def __init__(self, api_url: str | None = None, client: httpx.AsyncClient | None = None) -> None:
        self.api_url = api_url or get_settings().anilist_api_url
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_catalog_client()

    async def _post(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            AniListError: On transport failure, non-200 status or GraphQL errors
        """
        try:
            response = await retry_async(
                self.client.post,
                self.api_url,
                json={"query": query, "variables": variables},
                operation_name="AniList query",
            )
        except httpx.HTTPError as e:
            raise AniListError(f"AniList request failed: {e}") from e

        if response.status_code != 200:
            raise AniListError(f"AniList API responded with status: {response.status_code}")

        payload = response.json()
        if payload.get("errors"):
            messages = "; ".join(err.get("message", "unknown error") for err in payload["errors"])
            raise AniListError(f"AniList query error: {messages}")
        return payload.get("data") or {}

    @cached("anilist:genres", ttl=CACHE_TTL_SHORT)
    async def _fetch_genre_page(self, genres: list[str], page: int = 1) -> list[dict[str, Any]]:
        """Fetch one page of anime in any of ``genres`` (cached raw payload)."""
        data = await self._post(
            GENRE_SEARCH_QUERY,
            {"genres": genres, "page": page, "perPage": ANILIST_PAGE_SIZE},
        )
        return (data.get("Page") or {}).get("media") or []

    async def fetch_by_genres(self, genres: list[str], page: int = 1) -> list[CatalogShow]:
        """Most popular anime matching any of the given genres."""
        media = await self._fetch_genre_page(list(genres), page=page)
        logger.debug(f"AniList returned {len(media)} shows for genres {genres}")
        return [parse_media(m) for m in media]


anilist_service = AniListService()
