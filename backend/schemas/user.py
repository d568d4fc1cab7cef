from pydantic import BaseModel, field_validator, model_validator, validate_email
from typing import Optional

# Schema for registration requests; presence is checked as a whole so the
# client gets a single message naming all three fields
class UserCreate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username")
    @classmethod
    def username_min_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if v and len(v) < 3:
            raise ValueError("Username must be at least 3 characters long")
        return v

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v

    @field_validator("email")
    @classmethod
    def email_address(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return v
        v = v.strip()
        try:
            validate_email(v)
        except ValueError:
            raise ValueError("Please provide a valid email address")
        return v

    @model_validator(mode="after")
    def all_fields_present(self):
        if not self.username or not self.email or not self.password:
            raise ValueError("Please provide username, email and password")
        return self

# Schema for user authentication credentials
class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

# Public profile returned next to the token
class UserOut(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True

# Response of /register and /login
class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut
