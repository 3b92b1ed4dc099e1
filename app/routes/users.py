from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.schemas.user import (
    UserCreate,
    UserCreatedResponse,
    UserResponse,
    PasswordUpdate,
    MessageResponse,
)
from app.schemas.mood import MoodCreate, MoodResponse
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.utils.dependencies import get_current_user
from app.models.user import User

router = APIRouter(tags=["Users"])


@router.post("/users", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Create a new user (signup)

    - **username**: must not already exist (409 otherwise)
    - **password**: stored as a bcrypt hash
    """
    user = AuthService.register_user(db, user_data)
    return {"message": "User created successfully", "userId": user.id}


@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    """List all users"""
    return UserService.list_users(db)


@router.get("/users/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get the user behind the bearer token returned by /login"""
    return current_user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """Delete a user, their saved movies and moods"""
    UserService.delete_user(db, user_id)
    return None


@router.put("/user/{user_id}/password", response_model=MessageResponse)
def update_password(user_id: int, payload: PasswordUpdate, db: Session = Depends(get_db)):
    """Replace a user's password"""
    AuthService.update_password(db, user_id, payload.new_password)
    return {"message": "Password updated successfully"}


@router.post("/user/{user_id}/moods", response_model=MoodResponse, status_code=status.HTTP_201_CREATED)
def add_mood(user_id: int, payload: MoodCreate, db: Session = Depends(get_db)):
    """Record the user's current mood"""
    return UserService.add_mood(db, user_id, payload.mood)


@router.get("/user/{user_id}/moods", response_model=List[MoodResponse])
def get_moods(user_id: int, db: Session = Depends(get_db)):
    """Get the user's mood history, newest first"""
    return UserService.get_moods(db, user_id)
