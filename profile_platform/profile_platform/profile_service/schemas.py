from pydantic import BaseModel


class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    id: int
    name: str
    email: str
    token: str


class Identity(BaseModel):
    """Identity attached to a request admitted by the bearer-token check."""
    id: str


class ProfileResponse(BaseModel):
    message: str
    user: str
