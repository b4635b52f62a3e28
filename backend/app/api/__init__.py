from fastapi import APIRouter
from app.api import auth, skill_gap

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(skill_gap.router, prefix="/skill-gap", tags=["skill-gap"])
