from pydantic import BaseModel, Field


class CurrentUser(BaseModel):
    """Identity resolved from a verified token."""
    id: int
    username: str


class AuthRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=32)
    password: str = Field(..., min_length=6, max_length=128)


class AuthResponse(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class LoginResponse(AuthResponse):
    token: str


class ChangeUsername(BaseModel):
    new_username: str = Field(..., min_length=3, max_length=32)


class ChangePassword(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class ClearData(BaseModel):
    password: str = Field(..., min_length=1, max_length=128)
