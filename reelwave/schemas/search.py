"""
Search and filter schemas
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
from enum import Enum

from reelwave.schemas.movie import Movie


# ============================================
# Enums for type-safe filter options
# ============================================

class SortOption(str, Enum):
    """Available sort options for movie discovery"""
    POPULARITY_DESC = "popularity.desc"
    VOTE_AVERAGE_DESC = "vote_average.desc"
    RELEASE_DATE_DESC = "release_date.desc"
    RELEASE_DATE_ASC = "release_date.asc"
    TITLE_ASC = "title.asc"


# ============================================
# Search Filters
# ============================================

class SearchFilters(BaseModel):
    """
    Filter set for a search
    Empty strings coming from form selects mean "any"
    """
    genre: Optional[str] = Field(
        None,
        description="Genre ID (e.g., '28' for Action)",
        json_schema_extra={"example": "28"}
    )

    year: Optional[str] = Field(
        None,
        pattern=r"^\d{4}$",
        description="Release year filter"
    )

    min_rating: Optional[int] = Field(
        None,
        ge=0,
        le=10,
        description="Minimum vote average (0-10)"
    )

    sort_by: SortOption = Field(
        default=SortOption.POPULARITY_DESC,
        description="Sort order for results"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("genre", "year", "min_rating", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("genre")
    @classmethod
    def validate_genre(cls, v):
        if v is not None and not (v.strip().isascii() and v.strip().isdigit()):
            raise ValueError("Genre must be a numeric TMDB genre ID")
        return v.strip() if v is not None else v

    def to_tmdb_params(self) -> dict:
        """
        Convert filters to TMDB /discover/movie parameters
        """
        params = {'sort_by': self.sort_by.value}

        # Add optional filters only if provided
        if self.genre:
            params['with_genres'] = self.genre

        if self.year:
            params['year'] = self.year

        if self.min_rating is not None:
            params['vote_average.gte'] = self.min_rating

        return params

    def matches(self, movie: Movie) -> bool:
        """Local post-filter used when upstream cannot apply the filters"""
        if self.genre and int(self.genre) not in movie.genre_ids:
            return False

        # Missing release dates never match a year filter
        if self.year and not movie.release_date.startswith(self.year):
            return False

        if self.min_rating is not None and movie.vote_average < self.min_rating:
            return False

        return True


# ============================================
# Response Schemas
# ============================================

class SearchResponse(BaseModel):
    """Current search state"""
    query: Optional[str]
    filters: Optional[SearchFilters]
    results: List[Movie]
