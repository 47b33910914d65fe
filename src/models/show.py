"""Show (catalog entry) model."""

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin


class Show(Base, TimestampMixin):
    """Anime cached locally from the AniList catalog.

    Shared across users: the watchlist references shows, shows never reference users.
    """

    __tablename__ = "shows"

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[str] = mapped_column(String(100), unique=True, index=True)  # AniList media id
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    synopsis: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    episodes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Ordered, distinct genre names as returned by the catalog
    genres: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    # Community rating on a 0-5 scale
    avg_rating: Mapped[float | None] = mapped_column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<Show(id={self.id}, title={self.title})>"
