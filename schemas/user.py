"""User collection schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.helpers import coerce_text


class UserCreate(BaseModel):
    """Body of `POST /api/users`."""
    username: str = Field(..., description="Display name, not required to be unique")

    @field_validator("username", mode="before")
    @classmethod
    def require_username(cls, value):
        if value is None or value == "":
            raise ValueError("Username required")
        return coerce_text(value)


class UserOut(BaseModel):
    """User as returned by the API."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., description="Display name")
    id: str = Field(..., alias="_id", description="Generated user identifier")
