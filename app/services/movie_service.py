from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from app.models.movie import Movie
from app.schemas.movie import MovieCreate, MovieDetails
from app.services.tmdb_service import TMDBService

logger = logging.getLogger(__name__)


class MovieService:
    """Service for the movie catalog"""

    @staticmethod
    def list_movies(db: Session) -> List[Movie]:
        return db.query(Movie).order_by(Movie.id).all()

    @staticmethod
    def get_movie(db: Session, movie_id: int) -> Movie:
        movie = db.get(Movie, movie_id)
        if not movie:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
        return movie

    @staticmethod
    def create_movie(db: Session, movie_data: MovieCreate) -> Movie:
        """Insert a catalog entry; a duplicate tmdb_id is a conflict, never an update"""
        if db.query(Movie).filter(Movie.tmdb_id == movie_data.tmdb_id).first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Movie with tmdb_id {movie_data.tmdb_id} already exists"
            )

        movie = Movie(
            tmdb_id=movie_data.tmdb_id,
            title=movie_data.title,
            overview=movie_data.overview,
            poster_path=movie_data.poster_path,
            vote_average=movie_data.vote_average,
        )
        db.add(movie)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Duplicate tmdb_id on insert: {movie_data.tmdb_id}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Movie with tmdb_id {movie_data.tmdb_id} already exists"
            )
        db.refresh(movie)
        return movie

    @staticmethod
    def find_by_tmdb_id(db: Session, tmdb_id: int) -> Optional[Movie]:
        return db.query(Movie).filter(Movie.tmdb_id == tmdb_id).first()

    @staticmethod
    def ensure_movie(db: Session, tmdb_id: int, details: Optional[MovieDetails] = None) -> Movie:
        """
        Resolve a TMDB id to a catalog row, creating it if absent.

        Lookup order:
        1. Existing catalog row with this tmdb_id (returned unchanged)
        2. The supplied details
        3. TMDB itself (502 if that fails)

        The new row is flushed, not committed, so the caller's commit covers it.
        Losing an insert race to another request rolls back the session and
        returns the row that request created.
        """
        movie = MovieService.find_by_tmdb_id(db, tmdb_id)
        if movie:
            return movie

        if details is None:
            tmdb_details = TMDBService.get_movie_details(tmdb_id)
            details = MovieDetails(
                title=tmdb_details.get("title") or "Unknown",
                overview=tmdb_details.get("overview") or "",
                poster_path=tmdb_details.get("poster_path") or "",
                vote_average=tmdb_details.get("vote_average") or 0,
            )

        movie = Movie(
            tmdb_id=tmdb_id,
            title=details.title,
            overview=details.overview,
            poster_path=details.poster_path,
            vote_average=details.vote_average,
        )
        db.add(movie)
        try:
            db.flush()
        except IntegrityError:
            # A concurrent request inserted the same tmdb_id first; use its row
            db.rollback()
            logger.warning(f"tmdb_id {tmdb_id} was added concurrently, reusing catalog row")
            winner = MovieService.find_by_tmdb_id(db, tmdb_id)
            if winner is None:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Movie with tmdb_id {tmdb_id} could not be added"
                )
            return winner
        logger.info(f"Added tmdb_id {tmdb_id} to catalog as movie {movie.id}")
        return movie

    @staticmethod
    def delete_movie(db: Session, movie_id: int) -> None:
        """Remove a catalog entry; every user association is logged as deleted"""
        movie = MovieService.get_movie(db, movie_id)
        db.delete(movie)
        db.commit()
        logger.info(f"Deleted movie {movie_id} from catalog")
