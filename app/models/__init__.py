"""
Import all models to ensure they are registered with SQLAlchemy
"""
from app.models.user import User
from app.models.movie import Movie
from app.models.deletion_log import DeletionLog
from app.models.user_movie import UserMovie
from app.models.user_mood import UserMood

__all__ = [
    "User",
    "Movie",
    "UserMovie",
    "UserMood",
    "DeletionLog"
]
