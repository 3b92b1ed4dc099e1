import logging

from sqlalchemy import Column, Integer, DateTime, ForeignKey, event
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.deletion_log import DeletionLog

logger = logging.getLogger(__name__)


class UserMovie(Base):
    """
    Association row: a user has saved a movie.

    Rows must only be removed through the ORM (``session.delete`` or a
    parent cascade). Every such delete writes a DeletionLog row inside the
    same flush, see ``log_user_movie_deletion`` below.
    """
    __tablename__ = "user_movies"

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    movie_id = Column(Integer, ForeignKey('movies.id', ondelete='CASCADE'), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="movie_links")
    movie = relationship("Movie", back_populates="user_links")

    def __repr__(self):
        return f"<UserMovie(user_id={self.user_id}, movie_id={self.movie_id})>"


@event.listens_for(UserMovie, "after_delete")
def log_user_movie_deletion(mapper, connection, target):
    """Append a deletion_logs row for every deleted association"""
    connection.execute(
        DeletionLog.__table__.insert().values(
            user_id=target.user_id,
            movie_id=target.movie_id,
            deleted_at=func.now(),
        )
    )
    logger.debug(f"Logged deletion of movie {target.movie_id} for user {target.user_id}")
