from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class RegisterResponse(BaseModel):
    message: str = "User registered!"
    id: int


class LoginResponse(BaseModel):
    message: str = "User logged in!"
    token: str
    role: str
