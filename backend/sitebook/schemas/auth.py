"""Auth Schemas — login input.

Invariants:
    - username is stripped and must be non-empty
    - password is optional and never inspected by the session gateway
"""

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str | None = Field(None, max_length=200)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v
