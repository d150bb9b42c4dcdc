from fastapi import APIRouter, Depends
from typing import List

from reelwave.schemas.movie import Movie
from reelwave.schemas.preferences import DislikeRequest, LikeRequest, UserPreferences
from reelwave.services.movie_session import MovieSession
from reelwave.utils.dependencies import get_movie_session

router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


@router.get("/", response_model=UserPreferences)
async def get_preferences(session: MovieSession = Depends(get_movie_session)):
    """Get all stored preferences"""
    return session.preferences


# ==================== LIKES ====================

@router.post("/like", response_model=UserPreferences)
async def like_movie(payload: LikeRequest, session: MovieSession = Depends(get_movie_session)):
    """
    Like a movie

    - **movie_id**: TMDB movie ID
    - **genre_ids**: genres added to favorite genres
    """
    return session.like(payload.movie_id, payload.genre_ids)


@router.post("/dislike", response_model=UserPreferences)
async def dislike_movie(payload: DislikeRequest, session: MovieSession = Depends(get_movie_session)):
    """Dislike a movie (removes it from liked movies)"""
    return session.dislike(payload.movie_id)


# ==================== WATCHLIST ====================

@router.get("/watchlist", response_model=List[Movie])
async def get_watchlist_movies(session: MovieSession = Depends(get_movie_session)):
    """Watchlist movies this session has already loaded, in watchlist order"""
    return session.watchlist_movies()


@router.post("/watchlist/{movie_id}", response_model=UserPreferences)
async def add_to_watchlist(movie_id: int, session: MovieSession = Depends(get_movie_session)):
    return session.add_to_watchlist(movie_id)


@router.delete("/watchlist/{movie_id}", response_model=UserPreferences)
async def remove_from_watchlist(movie_id: int, session: MovieSession = Depends(get_movie_session)):
    return session.remove_from_watchlist(movie_id)


# ==================== SEARCH HISTORY ====================

@router.delete("/search-history", response_model=UserPreferences)
async def clear_search_history(session: MovieSession = Depends(get_movie_session)):
    """Clear search history only"""
    return session.clear_search_history()
