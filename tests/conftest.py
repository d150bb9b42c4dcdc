import random
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from reelwave.database import Base
from reelwave.main import app
from reelwave.models import PersistedRecord  # noqa: F401
from reelwave.schemas.movie import Movie, MovieDetails
from reelwave.services.auth_service import AuthService
from reelwave.services.movie_session import MovieSession
from reelwave.services.storage_service import StateRepository
from reelwave.services.tmdb_service import UpstreamError
from reelwave.utils.dependencies import get_auth_service, get_movie_session

SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def build_movie(movie_id, **overrides):
    data = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "overview": f"Overview for movie {movie_id}",
        "release_date": "2010-07-16",
        "vote_average": 7.5,
        "vote_count": 1000,
        "genre_ids": [28],
        "popularity": 50.0,
        "original_language": "en",
    }
    data.update(overrides)
    return Movie.model_validate(data)


class FakeCatalog:
    """In-memory stand-in for TMDBService that records every call."""

    def __init__(self):
        self.calls = []
        self.failing = set()
        self.trending = [build_movie(1), build_movie(2)]
        self.search_results = []
        self.discover_results = [build_movie(10), build_movie(11)]
        self.similar_results = [build_movie(20), build_movie(21)]
        self.top_rated = [build_movie(30), build_movie(31)]
        self.details = {}

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failing:
            raise UpstreamError(f"TMDB API error: {name} failed", status_code=503)

    def fetch_trending(self):
        self._call("fetch_trending")
        return list(self.trending)

    def search_by_text(self, query):
        self._call("search_by_text", query)
        return list(self.search_results)

    def discover(self, params):
        self._call("discover", dict(params))
        if f"discover:{params.get('sort_by')}" in self.failing:
            raise UpstreamError(f"TMDB API error: discover {params.get('sort_by')} failed")
        return list(self.discover_results)

    def fetch_details(self, movie_id):
        self._call("fetch_details", movie_id)
        if movie_id not in self.details:
            raise UpstreamError("TMDB API error: 404 Not Found", status_code=404)
        return self.details[movie_id]

    def fetch_similar(self, movie_id):
        self._call("fetch_similar", movie_id)
        return list(self.similar_results)

    def fetch_top_rated(self):
        self._call("fetch_top_rated")
        return list(self.top_rated)

    def calls_to(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def make_movie():
    return build_movie


@pytest.fixture
def make_details():
    def _make(movie_id, **overrides):
        data = {
            "id": movie_id,
            "title": f"Movie {movie_id}",
            "release_date": "1999-03-31",
            "vote_average": 8.2,
            "vote_count": 20000,
            "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
            "runtime": 136,
            "tagline": "Welcome to the Real World.",
            "production_companies": [{"id": 79, "name": "Village Roadshow Pictures", "logo_path": None}],
            "production_countries": [{"iso_3166_1": "US", "name": "United States of America"}],
            "spoken_languages": [{"iso_639_1": "en", "name": "English"}],
        }
        data.update(overrides)
        return MovieDetails.model_validate(data)
    return _make


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def db_session_factory():
    """Provide a clean in-memory database for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield TestingSessionLocal
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(db_session_factory):
    return StateRepository(db_session_factory)


@pytest.fixture
def movie_session(catalog, repository):
    return MovieSession(catalog, repository, rng=random.Random(42))


@pytest.fixture
def client(movie_session):
    """FastAPI test client wired to the test session."""
    auth_service = AuthService()
    app.dependency_overrides[get_movie_session] = lambda: movie_session
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    yield TestClient(app)

    app.dependency_overrides.pop(get_movie_session, None)
    app.dependency_overrides.pop(get_auth_service, None)
