"""
Session endpoints.

A caller logs in with their user id and the shared app password and gets a
session cookie; every skill gap endpoint reads the user id back from it.
"""

import logging

from fastapi import APIRouter, Depends, Response, HTTPException, status
from app.schemas import LoginRequest, LoginResponse
from app.auth import (
    COOKIE_NAME,
    TOKEN_EXPIRE_DAYS,
    create_session_token,
    get_current_user,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, response: Response):
    if not verify_password(request.password):
        logger.warning(f"Rejected login for user {request.user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )

    response.set_cookie(
        key=COOKIE_NAME,
        value=create_session_token(request.user_id),
        httponly=True,
        max_age=TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        samesite="lax",
    )
    logger.info(f"Session started for user {request.user_id}")
    return LoginResponse(success=True, message="Logged in successfully")


@router.post("/logout", response_model=LoginResponse)
async def logout(response: Response):
    response.delete_cookie(COOKIE_NAME)
    return LoginResponse(success=True, message="Logged out successfully")


@router.get("/check")
async def check_auth(user_id: str = Depends(get_current_user)):
    """Report the user id bound to the current session."""
    return {"authenticated": True, "userId": user_id}
