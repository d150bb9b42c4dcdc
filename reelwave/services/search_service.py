"""
Search Service - text search and filtered discovery
"""
from typing import List, Optional
import logging

from reelwave.schemas.movie import Movie
from reelwave.schemas.search import SearchFilters
from reelwave.services.preference_service import PreferenceStore
from reelwave.services.tmdb_service import TMDBService

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Resolves a (query, filters) pair into one result list.

    - Non-empty query: TMDB text search, then local post-filtering, since the
      search endpoint ignores genre/year/rating/sort. Relevance order is kept.
    - Empty query: TMDB discover with the filters as upstream parameters.
    """

    def __init__(self, catalog: TMDBService, preferences: PreferenceStore):
        self.catalog = catalog
        self.preferences = preferences
        self.results: List[Movie] = []
        self.query: Optional[str] = None
        self.filters: Optional[SearchFilters] = None

    def search(self, query: str, filters: Optional[SearchFilters] = None) -> List[Movie]:
        """
        Run a search and store it as the current one.

        Raises:
            UpstreamError: if the TMDB call fails; current results are kept
        """
        filters = filters or SearchFilters()

        # Emptiness gating belongs to the caller; every query is recorded
        self.preferences.record_search(query)

        if query:
            movies = self.catalog.search_by_text(query)
            results = [movie for movie in movies if filters.matches(movie)]
            logger.info(f"Text search '{query}': {len(results)}/{len(movies)} results after filtering")
        else:
            results = self.catalog.discover(filters.to_tmdb_params())
            logger.info(f"Discover search: {len(results)} results")

        self.results = results
        self.query = query
        self.filters = filters
        return results
