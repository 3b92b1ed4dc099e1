from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List
import logging

from app.models.user import User
from app.models.user_mood import UserMood

logger = logging.getLogger(__name__)


class UserService:
    """Service for user lookups, deletion and moods"""

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    @staticmethod
    def list_users(db: Session) -> List[User]:
        return db.query(User).order_by(User.id).all()

    @staticmethod
    def delete_user(db: Session, user_id: int) -> None:
        """
        Delete a user together with their saved movies and moods.
        Each saved movie leaves a deletion log row (same transaction).
        """
        user = UserService.get_user(db, user_id)
        saved = len(user.movie_links)
        db.delete(user)
        db.commit()
        logger.info(f"Deleted user {user_id} ({saved} saved movies logged)")

    @staticmethod
    def add_mood(db: Session, user_id: int, mood: str) -> UserMood:
        UserService.get_user(db, user_id)
        entry = UserMood(user_id=user_id, mood=mood)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def get_moods(db: Session, user_id: int) -> List[UserMood]:
        UserService.get_user(db, user_id)
        return db.query(UserMood).filter(
            UserMood.user_id == user_id
        ).order_by(UserMood.created_at.desc(), UserMood.id.desc()).all()
