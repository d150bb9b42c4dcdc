from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError
from typing import List, Optional

from reelwave.schemas.movie import Movie, MovieDetails
from reelwave.schemas.search import SearchFilters, SearchResponse, SortOption
from reelwave.services.movie_session import MovieSession
from reelwave.services.tmdb_service import get_image_url
from reelwave.utils.dependencies import get_movie_session

router = APIRouter(prefix="/api/movies", tags=["Movies"])


def raise_for_session_error(session: MovieSession) -> None:
    """Surface an upstream failure recorded on the session"""
    if session.error:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=session.error)


# ============================================
# Trending
# ============================================

@router.get("/trending", response_model=List[Movie])
async def get_trending(session: MovieSession = Depends(get_movie_session)):
    """Get popular movies (first page)"""
    movies = session.fetch_trending()
    raise_for_session_error(session)
    return movies


# ============================================
# Search & Discovery
# ============================================

@router.get("/search", response_model=SearchResponse)
async def search_movies(
    query: str = Query("", max_length=200, description="Search text (empty = discover)"),
    genre: Optional[str] = Query(None, description="Genre ID"),
    year: Optional[str] = Query(None, description="Release year"),
    min_rating: Optional[str] = Query(None, description="Minimum rating"),
    sort_by: SortOption = Query(SortOption.POPULARITY_DESC, description="Sort option"),
    session: MovieSession = Depends(get_movie_session)
):
    """
    Search movies with optional filters

    - With a query: text search, filters applied to the results
    - Without a query: discovery using the filters upstream
    """
    try:
        filters = SearchFilters(genre=genre, year=year, min_rating=min_rating, sort_by=sort_by)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors(include_url=False, include_context=False, include_input=False))

    session.search(query, filters)
    raise_for_session_error(session)
    return SearchResponse(
        query=session.current_query,
        filters=session.current_filters,
        results=session.search_results,
    )


@router.get("/image-url")
async def image_url(path: Optional[str] = Query(None, description="TMDB image path")):
    """Resolve a TMDB image path to a full URL"""
    return {"url": get_image_url(path)}


# ============================================
# Movie Details (MUST be last - dynamic route)
# ============================================

@router.get("/{movie_id}", response_model=MovieDetails)
async def get_movie_details(movie_id: int, session: MovieSession = Depends(get_movie_session)):
    """Get movie details by ID - cached after the first fetch"""
    details = session.fetch_movie_details(movie_id)
    if details is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return details
