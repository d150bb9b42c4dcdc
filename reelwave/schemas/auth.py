from pydantic import BaseModel


# Schema for user login (stub: any non-empty credentials are accepted)
class UserLogin(BaseModel):
    email: str
    password: str


# Schema for user response
class UserResponse(BaseModel):
    id: str
    email: str
    name: str


class MessageResponse(BaseModel):
    message: str
