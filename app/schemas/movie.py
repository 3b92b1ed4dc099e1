from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional


class MovieDetails(BaseModel):
    """Catalog metadata sent by the frontend along with a TMDB id"""
    title: str = Field(..., min_length=1, max_length=255)
    overview: Optional[str] = ""
    poster_path: Optional[str] = Field("", max_length=255)
    vote_average: Optional[float] = Field(0, ge=0, le=10)


class MovieCreate(MovieDetails):
    """Schema for adding a movie straight to the catalog"""
    tmdb_id: int = Field(..., description="TMDB movie ID")


class MovieResponse(BaseModel):
    id: int  # Internal DB id
    tmdb_id: Optional[int]
    title: str
    overview: Optional[str]
    poster_path: Optional[str]
    vote_average: Optional[float]
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class UserMovieAdd(BaseModel):
    """
    Body of POST /user/{userId}/movies

    - **movieId**: TMDB movie ID (resolved to the internal movie.id)
    - **movieDetails**: catalog metadata, used only if the movie is not in the catalog yet
    """
    movie_id: int = Field(..., alias="movieId", description="TMDB movie ID")
    movie_details: Optional[MovieDetails] = Field(None, alias="movieDetails")
    model_config = ConfigDict(populate_by_name=True)


class UserMovieAdded(BaseModel):
    message: str
    userId: int
    movieId: int  # Internal DB id
    tmdbId: int


class UserMovieRemoved(BaseModel):
    message: str
    userId: int
    movieId: int
