# controllers/auth.py
"""Registration, login and account settings."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from .. import config
from ..auth import create_access_token, get_current_user
from ..dependencies import get_db
from ..schemas import auth as schemas
from ..services import accounts as service

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=config.COOKIE_NAME,
        value=token,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.COOKIE_SECURE,
        max_age=config.JWT_EXPIRE_DAYS * 24 * 60 * 60
    )


@router.post("/register", response_model=schemas.AuthResponse, summary="Register a new account")
def register(payload: schemas.AuthRequest, db: Session = Depends(get_db)):
    """Create an account. Usernames are unique."""
    return service.register(db, payload.username, payload.password)


@router.post("/login", response_model=schemas.LoginResponse, summary="Authenticate user")
def login(payload: schemas.AuthRequest, response: Response, db: Session = Depends(get_db)):
    """Verify credentials and issue a token (body and http-only cookie)."""
    user = service.authenticate(db, payload.username, payload.password)
    token = create_access_token(user.id, user.username)
    _set_session_cookie(response, token)
    logger.info(f"User {user.id} logged in")
    return {"id": user.id, "username": user.username, "token": token}


@router.post("/logout", summary="Log out user")
def logout(response: Response):
    """Expire the session cookie."""
    response.delete_cookie(key=config.COOKIE_NAME, path="/")
    return {"message": "Logged out"}


@router.get("/me", response_model=schemas.AuthResponse, summary="Get current user profile")
def me(db: Session = Depends(get_db), current_user: schemas.CurrentUser = Depends(get_current_user)):
    return service.get_user(db, current_user.id)


@router.put("/username", response_model=schemas.LoginResponse, summary="Change username")
def change_username(
    payload: schemas.ChangeUsername,
    response: Response,
    db: Session = Depends(get_db),
    current_user: schemas.CurrentUser = Depends(get_current_user)
):
    """Rename the account. A fresh token carrying the new name is issued."""
    user = service.change_username(db, current_user.id, payload.new_username)
    token = create_access_token(user.id, user.username)
    _set_session_cookie(response, token)
    return {"id": user.id, "username": user.username, "token": token}


@router.put("/password", status_code=status.HTTP_204_NO_CONTENT, summary="Change password")
def change_password(
    payload: schemas.ChangePassword,
    db: Session = Depends(get_db),
    current_user: schemas.CurrentUser = Depends(get_current_user)
):
    service.change_password(db, current_user.id, payload.current_password, payload.new_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/clear-data", status_code=status.HTTP_204_NO_CONTENT, summary="Delete all budgeting data")
def clear_data(
    payload: schemas.ClearData,
    db: Session = Depends(get_db),
    current_user: schemas.CurrentUser = Depends(get_current_user)
):
    """Remove every month, category and fixed expense and reset balances. Requires the password."""
    service.clear_data(db, current_user.id, payload.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
