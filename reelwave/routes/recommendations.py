"""
Recommendation Routes
Personalized recommendation groups built from the user's preferences
"""
from fastapi import APIRouter, Depends
import logging

from reelwave.routes.movies import raise_for_session_error
from reelwave.schemas.recommendation import RecommendationsResponse
from reelwave.services.movie_session import MovieSession
from reelwave.utils.dependencies import get_movie_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["Recommendations"])


@router.get("/", response_model=RecommendationsResponse)
async def get_recommendations(session: MovieSession = Depends(get_movie_session)):
    """
    Get personalized recommendation groups

    **Groups (in order, each only when available):**
    - `genre-matching`: highest rated in your top 3 genres
    - `collaborative-filtering`: TMDB recommendations for a random liked movie
    - `trending-genre-based`: popular in your top 2 genres
    - `rating-based`: all-time top rated (always last)

    Without any preference signal (likes, genres, searches) no groups are
    built and `has_preferences` is false so the client can show onboarding.
    """
    if not session.has_preference_signal():
        logger.info("No preference signal yet, skipping recommendations")
        return RecommendationsResponse(has_preferences=False, groups=[])

    groups = session.get_recommendations()
    raise_for_session_error(session)
    return RecommendationsResponse(has_preferences=True, groups=groups)
