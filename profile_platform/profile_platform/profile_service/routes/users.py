"""
User routes: registration, login and the token-protected profile.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..auth import hash_password, verify_password
from ..db import get_db
from ..middleware import get_authenticator, protect
from ..models import User
from ..schemas import AuthResponse, Identity, ProfileResponse, UserCreate, UserLogin

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


def issue_token_for(request: Request, user: User) -> str:
    expires_minutes = request.app.state.settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return get_authenticator(request).issue(user.id, expires_minutes=expires_minutes)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, request: Request, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == payload.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    try:
        user = User(name=payload.name, email=payload.email, password=hash_password(payload.password))
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        logger.info("Duplicate registration for email=%s", payload.email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Registration failed for email=%s: %s", payload.email, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user"
        ) from e

    logger.info("Registered user_id=%s email=%s", user.id, user.email)
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=issue_token_for(request, user))


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, request: Request, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == credentials.email).first()
    if not user or not verify_password(credentials.password, user.password):
        logger.info("Login failed for email=%s", credentials.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info("Successful login: user_id=%s", user.id)
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=issue_token_for(request, user))


@router.get("/profile", response_model=ProfileResponse)
def profile(identity: Identity = Depends(protect)):
    return ProfileResponse(message="This is a protected route", user=identity.id)
