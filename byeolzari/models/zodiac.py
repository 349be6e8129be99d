"""Database model for the zodiac reference table."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field as ORMField, SQLModel


class Zodiac(SQLModel, table=True):
    """Zodiac sign with the calendar range it covers (``MM-DD`` bounds)."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str = ORMField(unique=True)
    symbol: str
    start_date: str
    end_date: str


__all__ = ["Zodiac"]
