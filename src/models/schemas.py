"""Pydantic schemas for validation and serialization."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.constants import RATING_MAX, RATING_MIN
from src.models.watchlist import WatchStatus


# Show schemas
class ShowCreate(BaseModel):
    """Catalog data used to cache a show locally."""

    external_id: str
    title: str
    synopsis: str | None = None
    image_url: str | None = None
    episodes: int | None = None
    genres: list[str] = Field(default_factory=list)
    avg_rating: float | None = Field(default=None, ge=0, le=5)


# Watchlist schemas
class WatchlistUpdate(BaseModel):
    """Status and/or rating change. Omitted fields are left untouched."""

    status: WatchStatus | None = None
    rating: int | None = Field(default=None, ge=RATING_MIN, le=RATING_MAX)


# Recommendation schemas (JSON uses camelCase keys)
class CamelModel(BaseModel):
    """Base for response models serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class MatchFactors(CamelModel):
    """The four normalized sub-scores behind a match score."""

    genre_match: float
    rating: float
    recency: float
    popularity: float


class RecommendedShow(CamelModel):
    """A candidate show with its score breakdown."""

    id: int
    external_id: str | None = None
    title: str
    genres: list[str]
    avg_rating: float | None = None
    image_url: str | None = None
    synopsis: str | None = None
    match_score: float
    match_factors: MatchFactors


class BasedOn(CamelModel):
    """Summary of the history a recommendation run used."""

    show_count: int
    average_rating: float
    recency_score: float
    top_genres: list[str]


class RecommendationMetadata(CamelModel):
    based_on: BasedOn


class RecommendationsResult(CamelModel):
    """Ranked recommendations plus explanatory metadata."""

    recommendations: list[RecommendedShow]
    metadata: RecommendationMetadata


class BasicRecommendation(CamelModel):
    """Catalog show picked by the genre-frequency recommender."""

    external_id: str
    title: str
    image_url: str | None = None
    synopsis: str | None = None
    rating: float | None = None  # 5-star scale
    genres: list[str]


class BasicBasedOn(CamelModel):
    genres: list[str]
    show_count: int


class BasicRecommendationsResult(CamelModel):
    recommendations: list[BasicRecommendation]
    based_on: BasicBasedOn
