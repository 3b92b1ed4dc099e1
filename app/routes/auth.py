from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import UserLogin, LoginResponse
from app.services.auth_service import AuthService

# Define router
router = APIRouter(tags=["Authentication"])

# Login endpoint
@router.post("/login", response_model=LoginResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with username and password"""
    return AuthService.login_user(db, credentials)
