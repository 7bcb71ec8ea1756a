"""Schemas for joke endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JokeCreate(BaseModel):
    text: str
    origin: str | None = Field(default=None, max_length=50)


class JokeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    author_id: int
    origin: str
    created_at: datetime | None = None
