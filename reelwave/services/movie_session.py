"""
Movie Session - state owned by one ReelWave client

Holds everything the presentation layer reads (trending list, current search,
recommendation groups, details cache, loading flag, last error) and exposes
one entry point per user intent.
"""
from typing import Dict, List, Optional
import logging
import random

from reelwave.schemas.movie import Movie, MovieDetails
from reelwave.schemas.preferences import UserPreferences
from reelwave.schemas.recommendation import RecommendationGroup
from reelwave.schemas.search import SearchFilters
from reelwave.services.preference_service import PreferenceStore
from reelwave.services.recommendation_service import RecommendationAggregator
from reelwave.services.search_service import SearchEngine
from reelwave.services.storage_service import StateRepository
from reelwave.services.tmdb_service import TMDBService, UpstreamError

logger = logging.getLogger(__name__)


class MovieSession:
    """
    Explicitly owned client state.

    Calls run to completion one at a time; a slower, older response simply
    overwrites state when it lands (last writer wins).
    """

    def __init__(
        self,
        catalog: TMDBService,
        repository: Optional[StateRepository] = None,
        rng: Optional[random.Random] = None,
    ):
        self.catalog = catalog
        self.repository = repository

        preferences = repository.load_preferences() if repository else UserPreferences()
        self.movie_details: Dict[int, MovieDetails] = repository.load_movie_details() if repository else {}

        self.preference_store = PreferenceStore(preferences, repository)
        self.search_engine = SearchEngine(catalog, self.preference_store)
        self.aggregator = RecommendationAggregator(catalog, rng)

        self.trending: List[Movie] = []
        self.recommendations: List[RecommendationGroup] = []
        self.is_loading = False
        self.error: Optional[str] = None

    # ==================== READ ACCESSORS ====================

    @property
    def preferences(self) -> UserPreferences:
        return self.preference_store.snapshot()

    @property
    def search_results(self) -> List[Movie]:
        return self.search_engine.results

    @property
    def current_query(self) -> Optional[str]:
        return self.search_engine.query

    @property
    def current_filters(self) -> Optional[SearchFilters]:
        return self.search_engine.filters

    def has_preference_signal(self) -> bool:
        return self.preference_store.has_preference_signal()

    def watchlist_movies(self) -> List[Movie]:
        """Resolve watchlist IDs against every movie this session has seen."""
        known: Dict[int, Movie] = {}
        for movie in self.trending:
            known.setdefault(movie.id, movie)
        for movie in self.search_results:
            known.setdefault(movie.id, movie)
        for group in self.recommendations:
            for movie in group.movies:
                known.setdefault(movie.id, movie)
        for movie_id, details in self.movie_details.items():
            known.setdefault(movie_id, details)

        return [known[movie_id] for movie_id in self.preference_store.snapshot().watchlist if movie_id in known]

    # ==================== LOADING / ERROR PROTOCOL ====================

    def _begin(self) -> None:
        self.is_loading = True
        self.error = None

    def _fail(self, error: UpstreamError) -> None:
        self.error = error.message
        self.is_loading = False

    # ==================== CATALOG ENTRY POINTS ====================

    def fetch_trending(self) -> List[Movie]:
        self._begin()
        try:
            self.trending = self.catalog.fetch_trending()
        except UpstreamError as e:
            logger.error(f"Failed to fetch trending movies: {e.message}")
            self._fail(e)
            return self.trending
        self.is_loading = False
        return self.trending

    def search(self, query: str, filters: Optional[SearchFilters] = None) -> List[Movie]:
        self._begin()
        try:
            results = self.search_engine.search(query, filters)
        except UpstreamError as e:
            logger.error(f"Search failed for '{query}': {e.message}")
            self._fail(e)
            return self.search_results
        self.is_loading = False
        return results

    def fetch_movie_details(self, movie_id: int) -> Optional[MovieDetails]:
        """
        Get details for a movie, fetching them at most once.

        Cached entries never expire. Failures are logged and return None
        without touching the session error.
        """
        cached = self.movie_details.get(movie_id)
        if cached is not None:
            logger.debug(f"Details cache hit for movie {movie_id}")
            return cached

        try:
            details = self.catalog.fetch_details(movie_id)
        except UpstreamError as e:
            logger.error(f"Error fetching movie details for {movie_id}: {e.message}")
            return None

        self.movie_details[movie_id] = details
        if self.repository is not None:
            self.repository.save_movie_details(self.movie_details)
        return details

    def get_recommendations(self) -> List[RecommendationGroup]:
        self._begin()
        try:
            groups = self.aggregator.get_recommendations(self.preference_store.snapshot())
        except UpstreamError as e:
            logger.error(f"Failed to fetch recommendations: {e.message}")
            self._fail(e)
            return self.recommendations
        self.recommendations = groups
        self.is_loading = False
        return groups

    # ==================== PREFERENCE ENTRY POINTS ====================

    def like(self, movie_id: int, genre_ids: List[int]) -> UserPreferences:
        return self.preference_store.like(movie_id, genre_ids)

    def dislike(self, movie_id: int) -> UserPreferences:
        return self.preference_store.dislike(movie_id)

    def add_to_watchlist(self, movie_id: int) -> UserPreferences:
        return self.preference_store.add_to_watchlist(movie_id)

    def remove_from_watchlist(self, movie_id: int) -> UserPreferences:
        return self.preference_store.remove_from_watchlist(movie_id)

    def record_search(self, query: str) -> UserPreferences:
        return self.preference_store.record_search(query)

    def clear_search_history(self) -> UserPreferences:
        return self.preference_store.clear_search_history()
