from typing import Iterable, Optional
import logging

from reelwave.schemas.preferences import SEARCH_HISTORY_LIMIT, UserPreferences
from reelwave.services.storage_service import StateRepository

logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Owns the user's preferences and keeps them consistent.

    Invariants:
    - liked_movies, disliked_movies and watchlist hold no duplicates
    - liked_movies and disliked_movies are disjoint
    - search_history is most-recent-first, unique, at most 10 entries

    Every mutation is persisted when a repository is attached and returns a
    snapshot of the updated preferences.
    """

    def __init__(self, preferences: Optional[UserPreferences] = None, repository: Optional[StateRepository] = None):
        self._preferences = preferences.model_copy(deep=True) if preferences else UserPreferences()
        self._repository = repository

    def snapshot(self) -> UserPreferences:
        return self._preferences.model_copy(deep=True)

    def _commit(self) -> UserPreferences:
        if self._repository is not None:
            self._repository.save_preferences(self._preferences)
        return self.snapshot()

    def has_preference_signal(self) -> bool:
        """True when there is enough signal to personalize recommendations."""
        prefs = self._preferences
        return bool(prefs.liked_movies or prefs.favorite_genres or prefs.search_history)

    # ==================== LIKES ====================

    def like(self, movie_id: int, genre_ids: Iterable[int] = ()) -> UserPreferences:
        prefs = self._preferences
        if movie_id not in prefs.liked_movies:
            prefs.liked_movies.append(movie_id)

        for genre_id in genre_ids:
            if genre_id not in prefs.favorite_genres:
                prefs.favorite_genres.append(genre_id)

        prefs.disliked_movies = [m for m in prefs.disliked_movies if m != movie_id]
        logger.debug(f"Liked movie {movie_id}")
        return self._commit()

    def dislike(self, movie_id: int) -> UserPreferences:
        # Genres accreted by an earlier like are kept
        prefs = self._preferences
        if movie_id not in prefs.disliked_movies:
            prefs.disliked_movies.append(movie_id)

        prefs.liked_movies = [m for m in prefs.liked_movies if m != movie_id]
        logger.debug(f"Disliked movie {movie_id}")
        return self._commit()

    # ==================== WATCHLIST ====================

    def add_to_watchlist(self, movie_id: int) -> UserPreferences:
        if movie_id not in self._preferences.watchlist:
            self._preferences.watchlist.append(movie_id)
        return self._commit()

    def remove_from_watchlist(self, movie_id: int) -> UserPreferences:
        self._preferences.watchlist = [m for m in self._preferences.watchlist if m != movie_id]
        return self._commit()

    # ==================== SEARCH HISTORY ====================

    def record_search(self, query: str) -> UserPreferences:
        history = [q for q in self._preferences.search_history if q != query]
        self._preferences.search_history = [query, *history][:SEARCH_HISTORY_LIMIT]
        return self._commit()

    def clear_search_history(self) -> UserPreferences:
        self._preferences.search_history = []
        return self._commit()
