"""Watchlist entries: one user's relationship to one show."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.constants import RATING_MAX, RATING_MIN
from src.models.base import Base, TimestampMixin
from src.models.show import Show

if TYPE_CHECKING:
    from src.models.user import User


class WatchStatus(str, enum.Enum):
    """Watching status of a watchlist entry."""

    WATCHING = "watching"
    COMPLETED = "completed"
    DROPPED = "dropped"


class WatchlistEntry(Base, TimestampMixin):
    """A show on a user's watchlist, with status and optional 1-5 rating."""

    __tablename__ = "watchlist"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    show_id: Mapped[int] = mapped_column(ForeignKey("shows.id", ondelete="CASCADE"), index=True)
    status: Mapped[WatchStatus] = mapped_column(
        Enum(WatchStatus), default=WatchStatus.WATCHING, nullable=False
    )
    rating: Mapped[int | None] = mapped_column(nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="watchlist")
    show: Mapped[Show] = relationship(Show, lazy="selectin")

    __table_args__ = (
        UniqueConstraint("user_id", "show_id", name="uq_watchlist_user_show"),
        CheckConstraint(
            f"rating IS NULL OR (rating >= {RATING_MIN} AND rating <= {RATING_MAX})",
            name="ck_watchlist_rating_range",
        ),
        Index("ix_watchlist_user_status", "user_id", "status"),
        Index("ix_watchlist_user_updated", "user_id", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<WatchlistEntry(user_id={self.user_id}, show_id={self.show_id}, status={self.status})>"
