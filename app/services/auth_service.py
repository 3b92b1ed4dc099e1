from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin
from app.utils.security import hash_password, verify_password, create_access_token
from fastapi import HTTPException, status
from datetime import timedelta
import os
import logging

logger = logging.getLogger(__name__)
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30))
INVALID_CREDENTIALS = "Invalid username or password"

class AuthService:
    @staticmethod
    def register_user(db: Session, user_data: UserCreate) -> User:
        # Check existing username
        existing_user = db.query(User).filter(User.username == user_data.username).first()
        if existing_user:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

        # Create user
        new_user = User(
            username=user_data.username,
            password=hash_password(user_data.password)
        )
        db.add(new_user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same username
            db.rollback()
            logger.warning(f"Duplicate username on insert: {user_data.username}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
        db.refresh(new_user)
        logger.info(f"User created: id={new_user.id}")
        return new_user


    @staticmethod
    def login_user(db: Session, credentials: UserLogin) -> dict:
        # Find user
        user = db.query(User).filter(User.username == credentials.username).first()

        # Same response for both cases so callers cannot probe usernames
        if not user:
            logger.warning(f"Login failed: unknown username {credentials.username}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        if not verify_password(credentials.password, str(user.password)):
            logger.warning(f"Login failed: incorrect password for user {user.id}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        # Create token
        access_token = create_access_token(
            data={"sub": user.username, "user_id": user.id},
            expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        )

        return {
            "message": "Login successful",
            "userId": user.id,
            "username": user.username,
            "access_token": access_token,
            "token_type": "bearer",
            "expires_in": ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        }

    @staticmethod
    def update_password(db: Session, user_id: int, new_password: str) -> None:
        """Re-hash and store a new password; the old one stops working immediately"""
        user = db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        user.password = hash_password(new_password)  # type: ignore
        db.commit()
        logger.info(f"Password updated for user {user_id}")
