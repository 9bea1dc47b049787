"""Pydantic models for link resolution."""

from __future__ import annotations

from pydantic import BaseModel


class ResolvedUrl(BaseModel):
    """Outcome of following redirects for a possibly shortened URL."""

    url: str
    domain: str = ""
    original_url: str = ""
    was_shortened: bool = False
