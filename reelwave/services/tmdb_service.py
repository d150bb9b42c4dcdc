import requests
import os
from typing import Dict, List, Optional
from dotenv import load_dotenv
from pydantic import ValidationError
from reelwave.schemas.movie import Movie, MovieDetails
import logging

load_dotenv()
logger = logging.getLogger(__name__)

IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
PLACEHOLDER_IMAGE = "/placeholder.svg"


def _timeout_from_env() -> Optional[float]:
    value = os.getenv("TMDB_TIMEOUT")
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid TMDB_TIMEOUT '{value}'; requests will not time out")
        return None


def get_image_url(path: Optional[str]) -> str:
    """Build a poster/backdrop URL, or the placeholder when TMDB has no image."""
    return f"{IMAGE_BASE_URL}{path}" if path else PLACEHOLDER_IMAGE


class UpstreamError(Exception):
    """Non-success response or transport failure from the TMDB API."""

    def __init__(self, message: str, status_code: Optional[int] = None, endpoint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint


# TMDB Service to interact with The Movie Database API
class TMDBService:
    """
    Catalog client for TMDB.

    Only the first page of every list endpoint is requested. No retries and
    no response caching: every call goes upstream.
    """
    BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else os.getenv("TMDB_API_KEY")
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else _timeout_from_env()
        self.http = http or requests.Session()

    # Internal method to make GET requests to TMDB API
    def _make_request(self, endpoint: str, params: Dict = None) -> Dict:
        """
        Make HTTP request to TMDB API.

        Args:
            endpoint: API endpoint (e.g., "/movie/popular")
            params: Query parameters

        Returns:
            JSON response from TMDB

        Raises:
            UpstreamError: If API key is missing or request fails
        """
        if not self.api_key:
            raise UpstreamError("TMDB API key not configured", endpoint=endpoint)
        params = dict(params or {})
        params['api_key'] = self.api_key
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.http.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            logger.debug(f"TMDB API request successful: {endpoint}")
            return response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"TMDB API error for {endpoint}: {str(e)}")
            raise UpstreamError(f"TMDB API error: {str(e)}", status_code=status_code, endpoint=endpoint) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"TMDB API error for {endpoint}: {str(e)}")
            raise UpstreamError(f"TMDB API error: {str(e)}", endpoint=endpoint) from e
        except ValueError as e:
            logger.error(f"TMDB API returned invalid JSON for {endpoint}: {str(e)}")
            raise UpstreamError(f"TMDB API returned invalid JSON: {str(e)}", endpoint=endpoint) from e

    def _fetch_movie_list(self, endpoint: str, params: Dict = None) -> List[Movie]:
        params = dict(params or {})
        params['page'] = 1
        data = self._make_request(endpoint, params)
        try:
            return [Movie.model_validate(item) for item in data.get('results') or []]
        except (ValidationError, AttributeError) as e:
            raise UpstreamError(f"Unexpected TMDB response for {endpoint}: {str(e)}", endpoint=endpoint) from e

    # Public methods to access various TMDB endpoints
    def fetch_trending(self) -> List[Movie]:
        """Get the first page of popular movies."""
        return self._fetch_movie_list("/movie/popular")

    def search_by_text(self, query: str) -> List[Movie]:
        """
        Search movies by title.
        TMDB text search accepts no genre/year/rating/sort parameters.
        """
        return self._fetch_movie_list("/search/movie", {'query': query})

    def discover(self, params: Dict) -> List[Movie]:
        """
        Discover movies with filters.
        Supports: with_genres, year, vote_average.gte, vote_count.gte, sort_by.
        """
        return self._fetch_movie_list("/discover/movie", params)

    def fetch_details(self, movie_id: int) -> MovieDetails:
        """Get detailed movie information."""
        endpoint = f"/movie/{movie_id}"
        data = self._make_request(endpoint)
        try:
            return MovieDetails.model_validate(data)
        except ValidationError as e:
            raise UpstreamError(f"Unexpected TMDB response for {endpoint}: {str(e)}", endpoint=endpoint) from e

    def fetch_similar(self, movie_id: int) -> List[Movie]:
        """Get TMDB recommendations for a movie ("because you liked X")."""
        return self._fetch_movie_list(f"/movie/{movie_id}/recommendations")

    def fetch_top_rated(self) -> List[Movie]:
        """Get the first page of all-time top rated movies."""
        return self._fetch_movie_list("/movie/top_rated")
