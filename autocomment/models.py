"""Data models returned by comment adapters (Pydantic)."""

from datetime import datetime

from pydantic import BaseModel


class Comment(BaseModel):
    """Comment on an issue or PR."""

    id: int | None = None
    body: str
    author: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    html_url: str | None = None
