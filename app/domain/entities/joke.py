"""Domain entity representing an authored joke."""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_JOKE_ORIGIN = "Local"


@dataclass
class Joke:
    """Short text published by a user."""

    id: int | None
    text: str
    author_id: int
    origin: str = DEFAULT_JOKE_ORIGIN
    created_at: datetime | None = None
