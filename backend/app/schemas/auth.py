from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    password: str


class LoginResponse(BaseModel):
    success: bool
    message: str
