"""Read access to the zodiac reference table."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, func, select

from ..models import Zodiac

logger = logging.getLogger(__name__)

# name, symbol, start (MM-DD), end (MM-DD)
ZODIAC_SIGNS = (
    ("Aries", "♈", "03-21", "04-19"),
    ("Taurus", "♉", "04-20", "05-20"),
    ("Gemini", "♊", "05-21", "06-21"),
    ("Cancer", "♋", "06-22", "07-22"),
    ("Leo", "♌", "07-23", "08-22"),
    ("Virgo", "♍", "08-23", "09-22"),
    ("Libra", "♎", "09-23", "10-23"),
    ("Scorpio", "♏", "10-24", "11-22"),
    ("Sagittarius", "♐", "11-23", "12-24"),
    ("Capricorn", "♑", "12-25", "01-19"),
    ("Aquarius", "♒", "01-20", "02-18"),
    ("Pisces", "♓", "02-19", "03-20"),
)


class ZodiacService:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def read_all(self) -> List[Zodiac]:
        with Session(self.engine) as session:
            return list(session.exec(select(Zodiac).order_by(Zodiac.id)).all())

    def read_one(self, zodiac_id: int) -> Optional[Zodiac]:
        with Session(self.engine) as session:
            return session.get(Zodiac, zodiac_id)

    def seed(self) -> int:
        """Fill an empty reference table; return the number of rows added."""

        with Session(self.engine) as session:
            count = session.exec(select(func.count(Zodiac.id))).one()
            if count:
                return 0
            for name, symbol, start_date, end_date in ZODIAC_SIGNS:
                session.add(
                    Zodiac(name=name, symbol=symbol, start_date=start_date, end_date=end_date)
                )
            session.commit()
        logger.info("Seeded %d zodiac signs", len(ZODIAC_SIGNS))
        return len(ZODIAC_SIGNS)


def zodiac_to_dict(zodiac: Zodiac) -> Dict[str, Any]:
    return {
        "id": zodiac.id,
        "name": zodiac.name,
        "symbol": zodiac.symbol,
        "start_date": zodiac.start_date,
        "end_date": zodiac.end_date,
    }


__all__ = ["ZODIAC_SIGNS", "ZodiacService", "zodiac_to_dict"]
