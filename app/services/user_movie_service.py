from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from app.models.movie import Movie
from app.models.user_movie import UserMovie
from app.models.deletion_log import DeletionLog
from app.schemas.movie import UserMovieAdd
from app.services.movie_service import MovieService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class UserMovieService:
    """Service for a user's saved movies"""

    @staticmethod
    def add_movie(db: Session, user_id: int, payload: UserMovieAdd) -> UserMovie:
        """Save a movie (by TMDB id) to a user's list"""
        UserService.get_user(db, user_id)

        # Ensure movie exists in catalog and get internal movie_id
        movie = MovieService.ensure_movie(db, payload.movie_id, payload.movie_details)

        existing = db.get(UserMovie, (user_id, movie.id))
        if existing:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Movie already in user's list"
            )

        link = UserMovie(user_id=user_id, movie_id=movie.id)
        db.add(link)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Conflict saving tmdb_id {payload.movie_id} for user {user_id}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Movie already in user's list"
            )
        db.refresh(link)
        return link

    @staticmethod
    def get_user_movies(db: Session, user_id: int) -> List[Movie]:
        UserService.get_user(db, user_id)
        return db.query(Movie).join(UserMovie, UserMovie.movie_id == Movie.id).filter(
            UserMovie.user_id == user_id
        ).order_by(UserMovie.created_at, Movie.id).all()

    @staticmethod
    def remove_movie(db: Session, user_id: int, movie_id: int) -> None:
        """
        Remove a saved movie. The deletion log row is written by the
        UserMovie after_delete hook in the same transaction.
        """
        link = db.get(UserMovie, (user_id, movie_id))
        if not link:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Movie not found in user's list"
            )
        db.delete(link)
        db.commit()
        logger.info(f"Removed movie {movie_id} from user {user_id}")

    @staticmethod
    def get_deletion_logs(
        db: Session,
        user_id: Optional[int] = None,
        movie_id: Optional[int] = None
    ) -> List[DeletionLog]:
        query = db.query(DeletionLog)
        if user_id is not None:
            query = query.filter(DeletionLog.user_id == user_id)
        if movie_id is not None:
            query = query.filter(DeletionLog.movie_id == movie_id)
        return query.order_by(DeletionLog.deleted_at.desc(), DeletionLog.id.desc()).all()
