from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.schemas.movie import UserMovieAdd, UserMovieAdded, UserMovieRemoved, MovieResponse
from app.schemas.deletion_log import DeletionLogResponse
from app.services.user_movie_service import UserMovieService

router = APIRouter(prefix="/user/{user_id}/movies", tags=["User Movies"])
deletion_log_router = APIRouter(prefix="/deletion-logs", tags=["Deletion Logs"])


@router.post("", response_model=UserMovieAdded, status_code=status.HTTP_201_CREATED)
def add_user_movie(user_id: int, payload: UserMovieAdd, db: Session = Depends(get_db)):
    """
    Add a movie to a user's list

    - **movieId**: TMDB movie ID (required)
    - **movieDetails**: title, overview, poster_path, vote_average (used if the movie is new to the catalog)
    """
    link = UserMovieService.add_movie(db, user_id, payload)
    return {
        "message": "Movie added successfully",
        "userId": user_id,
        "movieId": link.movie_id,
        "tmdbId": payload.movie_id,
    }


@router.get("", response_model=List[MovieResponse])
def get_user_movies(user_id: int, db: Session = Depends(get_db)):
    """Get the movies a user has saved"""
    return UserMovieService.get_user_movies(db, user_id)


@router.delete("/{movie_id}", response_model=UserMovieRemoved)
def remove_user_movie(user_id: int, movie_id: int, db: Session = Depends(get_db)):
    """Remove a movie (internal id) from a user's list"""
    UserMovieService.remove_movie(db, user_id, movie_id)
    return {"message": "Movie removed successfully", "userId": user_id, "movieId": movie_id}


@deletion_log_router.get("", response_model=List[DeletionLogResponse])
def get_deletion_logs(
    user_id: Optional[int] = Query(None, description="Filter by user"),
    movie_id: Optional[int] = Query(None, description="Filter by internal movie id"),
    db: Session = Depends(get_db)
):
    """Audit trail of removed user/movie associations, newest first"""
    return UserMovieService.get_deletion_logs(db, user_id, movie_id)
