import pytest
import requests

from reelwave.services.tmdb_service import TMDBService, UpstreamError, get_image_url


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload if payload is not None else {}
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class RecordingHttp:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse({"page": 1, "results": []})
        self.error = error
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


MOVIE_PAYLOAD = {
    "id": 603,
    "title": "The Matrix",
    "overview": "A hacker learns the truth.",
    "poster_path": "/poster.jpg",
    "backdrop_path": None,
    "release_date": "1999-03-31",
    "vote_average": 8.2,
    "vote_count": 25000,
    "genre_ids": [28, 878],
    "popularity": 80.5,
    "original_language": "en",
    "original_title": "The Matrix",
    "adult": False,
    "video": False,
}


def make_service(http):
    return TMDBService(api_key="test-key", base_url="https://tmdb.test/3", http=http)


def test_fetch_trending_requests_first_page_of_popular():
    http = RecordingHttp(FakeResponse({"page": 1, "results": [MOVIE_PAYLOAD]}))

    movies = make_service(http).fetch_trending()

    assert movies[0].id == 603
    assert movies[0].genre_ids == [28, 878]
    request = http.requests[0]
    assert request["url"] == "https://tmdb.test/3/movie/popular"
    assert request["params"] == {"page": 1, "api_key": "test-key"}


def test_search_by_text_sends_query():
    http = RecordingHttp()
    make_service(http).search_by_text("the matrix")

    request = http.requests[0]
    assert request["url"].endswith("/search/movie")
    assert request["params"]["query"] == "the matrix"
    assert request["params"]["page"] == 1


def test_discover_passes_filter_params():
    http = RecordingHttp()
    make_service(http).discover({"with_genres": "28", "sort_by": "vote_average.desc"})

    params = http.requests[0]["params"]
    assert params["with_genres"] == "28"
    assert params["sort_by"] == "vote_average.desc"


def test_similar_and_top_rated_endpoints():
    http = RecordingHttp()
    service = make_service(http)
    service.fetch_similar(603)
    service.fetch_top_rated()

    assert http.requests[0]["url"].endswith("/movie/603/recommendations")
    assert http.requests[1]["url"].endswith("/movie/top_rated")


def test_fetch_details_derives_genre_ids():
    payload = dict(MOVIE_PAYLOAD)
    payload.pop("genre_ids")
    payload.update({
        "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
        "runtime": 136,
        "tagline": None,
        "production_companies": [{"id": 79, "name": "Village Roadshow Pictures", "logo_path": None, "origin_country": "US"}],
        "production_countries": [{"iso_3166_1": "US", "name": "United States of America"}],
        "spoken_languages": [{"iso_639_1": "en", "name": "English", "english_name": "English"}],
    })
    http = RecordingHttp(FakeResponse(payload))

    details = make_service(http).fetch_details(603)

    assert http.requests[0]["url"].endswith("/movie/603")
    assert details.genre_ids == [28, 878]
    assert details.runtime == 136
    assert details.tagline == ""
    assert details.production_companies[0].name == "Village Roadshow Pictures"


def test_http_error_raises_upstream_error():
    http = RecordingHttp(FakeResponse({"status_message": "Invalid API key"}, status_code=401))

    with pytest.raises(UpstreamError) as exc_info:
        make_service(http).fetch_trending()

    assert exc_info.value.status_code == 401
    assert exc_info.value.endpoint == "/movie/popular"


def test_transport_error_raises_upstream_error():
    http = RecordingHttp(error=requests.exceptions.ConnectionError("connection refused"))

    with pytest.raises(UpstreamError) as exc_info:
        make_service(http).fetch_top_rated()

    assert exc_info.value.status_code is None


def test_missing_api_key_raises_without_request():
    http = RecordingHttp()
    service = TMDBService(api_key="", http=http)

    with pytest.raises(UpstreamError):
        service.fetch_trending()
    assert http.requests == []


def test_malformed_results_raise_upstream_error():
    http = RecordingHttp(FakeResponse({"results": [{"title": "no id"}]}))

    with pytest.raises(UpstreamError):
        make_service(http).fetch_trending()


def test_timeout_defaults_to_none(monkeypatch):
    monkeypatch.delenv("TMDB_TIMEOUT", raising=False)
    http = RecordingHttp()
    make_service(http).fetch_trending()
    assert http.requests[0]["timeout"] is None


def test_get_image_url():
    assert get_image_url("/poster.jpg") == "https://image.tmdb.org/t/p/w500/poster.jpg"
    assert get_image_url(None) == "/placeholder.svg"
    assert get_image_url("") == "/placeholder.svg"


def test_null_results_are_an_empty_list():
    http = RecordingHttp(FakeResponse({"page": 1, "results": None}))
    assert make_service(http).fetch_trending() == []


def test_details_with_genre_missing_id_raise_upstream_error():
    payload = dict(MOVIE_PAYLOAD, genre_ids=[], genres=[{"name": "Action"}])
    http = RecordingHttp(FakeResponse(payload))

    with pytest.raises(UpstreamError):
        make_service(http).fetch_details(603)


def test_invalid_timeout_env_falls_back_to_none(monkeypatch):
    monkeypatch.setenv("TMDB_TIMEOUT", "soon")
    http = RecordingHttp()
    service = TMDBService(api_key="test-key", http=http)

    assert service.timeout is None


def test_timeout_read_from_env(monkeypatch):
    monkeypatch.setenv("TMDB_TIMEOUT", "2.5")
    http = RecordingHttp()
    make_service(http).fetch_trending()
    assert http.requests[0]["timeout"] == 2.5
