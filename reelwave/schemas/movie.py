"""
Movie schemas normalized from TMDB responses
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional


class Movie(BaseModel):
    """Movie summary as returned by TMDB list endpoints"""
    id: int
    title: str = ""
    overview: str = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: str = ""
    vote_average: float = Field(default=0.0, ge=0, le=10)
    vote_count: int = Field(default=0, ge=0)
    genre_ids: List[int] = Field(default_factory=list)
    popularity: float = 0.0
    original_language: str = ""
    original_title: str = ""
    adult: bool = False
    video: bool = False

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("title", "overview", "release_date", "original_language", "original_title", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """TMDB sends null for some text fields"""
        return v if v is not None else ""

    @field_validator("vote_average", "popularity", mode="before")
    @classmethod
    def none_to_zero(cls, v):
        return v if v is not None else 0.0

    @field_validator("vote_count", mode="before")
    @classmethod
    def none_count_to_zero(cls, v):
        return v if v is not None else 0

    @field_validator("genre_ids", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return v if v is not None else []


class Genre(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(frozen=True)


class ProductionCompany(BaseModel):
    id: int
    name: str
    logo_path: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class ProductionCountry(BaseModel):
    iso_3166_1: str
    name: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class SpokenLanguage(BaseModel):
    iso_639_1: str
    name: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class MovieDetails(Movie):
    """
    Full movie record from /movie/{id}

    The detail endpoint returns resolved genres instead of genre_ids;
    genre_ids is filled from them so details can be liked like any summary.
    """
    genres: List[Genre] = Field(default_factory=list)
    runtime: Optional[int] = None
    tagline: str = ""
    production_companies: List[ProductionCompany] = Field(default_factory=list)
    production_countries: List[ProductionCountry] = Field(default_factory=list)
    spoken_languages: List[SpokenLanguage] = Field(default_factory=list)

    @field_validator("tagline", mode="before")
    @classmethod
    def none_tagline(cls, v):
        return v if v is not None else ""

    @model_validator(mode="before")
    @classmethod
    def derive_genre_ids(cls, data):
        if isinstance(data, dict) and not data.get("genre_ids") and data.get("genres"):
            data = dict(data)
            genre_ids = []
            for g in data["genres"]:
                genre_id = g.get("id") if isinstance(g, dict) else getattr(g, "id", None)
                if genre_id is None:
                    raise ValueError("Genre entry without an id")
                genre_ids.append(genre_id)
            data["genre_ids"] = genre_ids
        return data
