from pydantic import BaseModel, Field
from typing import List
from enum import Enum

from reelwave.schemas.movie import Movie


class RecommendationAlgorithm(str, Enum):
    """Strategy that produced a recommendation group"""
    GENRE_MATCHING = "genre-matching"
    COLLABORATIVE_FILTERING = "collaborative-filtering"
    TRENDING_GENRE_BASED = "trending-genre-based"
    RATING_BASED = "rating-based"


class RecommendationGroup(BaseModel):
    """One labeled list of recommended movies"""
    id: str
    title: str
    description: str
    movies: List[Movie] = Field(default_factory=list)
    algorithm: RecommendationAlgorithm


class RecommendationsResponse(BaseModel):
    """Recommendation page state"""
    has_preferences: bool
    groups: List[RecommendationGroup]
