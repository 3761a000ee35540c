"""User domain entity and request payloads."""

from typing import Annotated, Any

from pydantic import BaseModel, EmailStr, Field, StringConstraints, model_validator

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class User(BaseModel):
    """User entity representing a stored user record."""

    id: int = Field(description="Server-generated identifier")
    username: str = Field(description="User's login name")
    email: str = Field(description="User's email address")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, User):
            return False
        return (
            self.id == other.id
            and self.username == other.username
            and self.email == other.email
        )

    def __hash__(self) -> int:
        return hash((self.id, self.username, self.email))


class UserCreate(BaseModel):
    """Body of a create request. Both fields are required."""

    username: Username = Field(description="User's login name")
    email: EmailStr = Field(description="User's email address")


class UserUpdate(BaseModel):
    """Body of an update request.

    Fields are independently optional; only the ones supplied are written.
    """

    username: Username | None = Field(default=None, description="New login name")
    email: EmailStr | None = Field(default=None, description="New email address")

    @model_validator(mode="after")
    def require_one_field(self) -> "UserUpdate":
        if self.username is None and self.email is None:
            raise ValueError("at least one of username, email is required")
        return self

    def changes(self) -> dict[str, str]:
        """Return only the supplied fields."""
        return self.model_dump(exclude_none=True)
