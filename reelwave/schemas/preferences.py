from pydantic import BaseModel, Field, model_validator
from typing import List

SEARCH_HISTORY_LIMIT = 10


# ==================== PREFERENCE SCHEMAS ====================

class UserPreferences(BaseModel):
    """Durable user preference aggregate (persisted as the "preferences" record)"""
    liked_movies: List[int] = Field(default_factory=list, description="Liked movie IDs in insertion order")
    disliked_movies: List[int] = Field(default_factory=list, description="Disliked movie IDs")
    favorite_genres: List[int] = Field(default_factory=list, description="Genres accumulated from liked movies")
    search_history: List[str] = Field(default_factory=list, description="Most recent query first")
    watchlist: List[int] = Field(default_factory=list, description="Watchlist movie IDs")

    @model_validator(mode="after")
    def check_invariants(self):
        """Reject documents that no sequence of store operations could produce"""
        for name in ("liked_movies", "disliked_movies", "favorite_genres", "search_history", "watchlist"):
            values = getattr(self, name)
            if len(values) != len(set(values)):
                raise ValueError(f"{name} contains duplicates")

        if set(self.liked_movies) & set(self.disliked_movies):
            raise ValueError("liked_movies and disliked_movies overlap")

        if len(self.search_history) > SEARCH_HISTORY_LIMIT:
            raise ValueError(f"search_history holds more than {SEARCH_HISTORY_LIMIT} entries")
        return self


class LikeRequest(BaseModel):
    """Schema for liking a movie"""
    movie_id: int = Field(..., description="TMDB movie ID")
    genre_ids: List[int] = Field(default_factory=list, description="Genres of the liked movie")


class DislikeRequest(BaseModel):
    """Schema for disliking a movie"""
    movie_id: int = Field(..., description="TMDB movie ID")
