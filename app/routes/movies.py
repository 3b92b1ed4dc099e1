from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.schemas.movie import MovieCreate, MovieResponse
from app.services.movie_service import MovieService

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get("", response_model=List[MovieResponse])
def list_movies(db: Session = Depends(get_db)):
    """List the movie catalog"""
    return MovieService.list_movies(db)


@router.post("", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
def create_movie(movie_data: MovieCreate, db: Session = Depends(get_db)):
    """Add a movie to the catalog (409 if the tmdb_id is already there)"""
    return MovieService.create_movie(db, movie_data)


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movie(movie_id: int, db: Session = Depends(get_db)):
    """Remove a movie from the catalog and from every user's list"""
    MovieService.delete_movie(db, movie_id)
    return None
