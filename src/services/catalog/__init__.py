"""External anime catalog integrations."""

from src.services.catalog.anilist import AniListError, AniListService, CatalogShow, anilist_service

__all__ = ["AniListError", "AniListService", "CatalogShow", "anilist_service"]
