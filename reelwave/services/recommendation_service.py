"""
Recommendation Service - Multi-strategy recommendation aggregator
Blends genre matching, TMDB similarity, genre trends and top rated titles
"""
from typing import Callable, List, Optional
import logging
import random

from reelwave.schemas.movie import Movie
from reelwave.schemas.preferences import UserPreferences
from reelwave.schemas.recommendation import RecommendationAlgorithm, RecommendationGroup
from reelwave.services.tmdb_service import TMDBService, UpstreamError

logger = logging.getLogger(__name__)


class RecommendationAggregator:
    """
    Builds labeled recommendation groups from independent strategies:
    - Genre matching (highest rated in favorite genres)
    - Collaborative filtering (TMDB recommendations for a random liked movie)
    - Trending in favorite genres
    - Top rated (fallback, always last)

    Strategies run one after another in that order, so group order does not
    depend on upstream latency.
    """

    # Configuration constants (easy to modify)
    GROUP_SIZE = 10
    GENRE_MATCH_GENRES = 3
    TRENDING_GENRES = 2
    GENRE_MATCH_MIN_VOTES = 100

    def __init__(self, catalog: TMDBService, rng: Optional[random.Random] = None):
        self.catalog = catalog
        # Injectable so tests can pin the collaborative seed movie
        self.rng = rng or random.Random()

    def get_recommendations(self, preferences: UserPreferences) -> List[RecommendationGroup]:
        """
        Run every applicable strategy against the given preferences.

        Raises:
            UpstreamError: only when the top rated fallback fails
        """
        groups: List[RecommendationGroup] = []

        strategies: List[Callable[[UserPreferences], Optional[RecommendationGroup]]] = [
            self._genre_matching,
            self._collaborative_filtering,
            self._trending_in_genres,
        ]
        for strategy in strategies:
            try:
                group = strategy(preferences)
            except UpstreamError as e:
                logger.warning(f"Recommendation strategy {strategy.__name__} skipped: {e.message}")
                continue
            if group is not None:
                groups.append(group)

        groups.append(self._top_rated())

        logger.info(
            "Built recommendation groups: "
            + ", ".join(group.algorithm.value for group in groups)
        )
        return groups

    def _limit(self, movies: List[Movie]) -> List[Movie]:
        return movies[:self.GROUP_SIZE]

    def _genre_matching(self, preferences: UserPreferences) -> Optional[RecommendationGroup]:
        if not preferences.favorite_genres:
            return None

        genres = preferences.favorite_genres[:self.GENRE_MATCH_GENRES]
        movies = self.catalog.discover({
            'with_genres': ','.join(map(str, genres)),
            'sort_by': 'vote_average.desc',
            'vote_count.gte': self.GENRE_MATCH_MIN_VOTES,
        })
        return RecommendationGroup(
            id="genre-matches",
            title="Based on Your Favorite Genres",
            description="Highly rated movies in the genres you like most",
            movies=self._limit(movies),
            algorithm=RecommendationAlgorithm.GENRE_MATCHING,
        )

    def _collaborative_filtering(self, preferences: UserPreferences) -> Optional[RecommendationGroup]:
        if not preferences.liked_movies:
            return None

        # Random seed movie gives variety between calls
        seed_movie_id = self.rng.choice(preferences.liked_movies)
        movies = self.catalog.fetch_similar(seed_movie_id)
        return RecommendationGroup(
            id="because-you-liked",
            title="Because You Liked Similar Movies",
            description="Movies people enjoyed alongside one of your likes",
            movies=self._limit(movies),
            algorithm=RecommendationAlgorithm.COLLABORATIVE_FILTERING,
        )

    def _trending_in_genres(self, preferences: UserPreferences) -> Optional[RecommendationGroup]:
        if not preferences.favorite_genres:
            return None

        genres = preferences.favorite_genres[:self.TRENDING_GENRES]
        movies = self.catalog.discover({
            'with_genres': ','.join(map(str, genres)),
            'sort_by': 'popularity.desc',
        })
        return RecommendationGroup(
            id="trending-in-your-genres",
            title="Trending in Your Genres",
            description="Popular right now in genres you enjoy",
            movies=self._limit(movies),
            algorithm=RecommendationAlgorithm.TRENDING_GENRE_BASED,
        )

    def _top_rated(self) -> RecommendationGroup:
        movies = self.catalog.fetch_top_rated()
        return RecommendationGroup(
            id="top-rated",
            title="Critically Acclaimed",
            description="The highest rated movies of all time",
            movies=self._limit(movies),
            algorithm=RecommendationAlgorithm.RATING_BASED,
        )
