"""
Sequence Repository - identity allocation
"""
from typing import Iterable
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from retail_orders.exceptions import PersistenceRejected
from retail_orders.models.sequence import IdSequence


class SequenceRepository:
    """Hands out monotonically increasing identities"""

    def __init__(self, db: Session):
        self.db = db

    def ensure(self, names: Iterable[str], start: int) -> None:
        """Create missing sequences so their first value is ``start``"""
        existing = set(self.db.scalars(select(IdSequence.name)).all())
        for name in names:
            if name not in existing:
                self.db.add(IdSequence(name=name, last_value=start - 1))
        self.db.commit()

    def next_value(self, name: str) -> int:
        """
        Allocate the next identity from ``name``

        The increment is committed immediately, so the value stays consumed
        whatever happens to the write it was allocated for.

        Raises:
            PersistenceRejected: If no sequence called ``name`` exists
        """
        result = self.db.execute(
            update(IdSequence)
            .where(IdSequence.name == name)
            .values(last_value=IdSequence.last_value + 1)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise PersistenceRejected(f"Sequence {name!r} does not exist", stage="sequence")

        value = self.db.scalar(
            select(IdSequence.last_value).where(IdSequence.name == name)
        )
        self.db.commit()
        return value

    def current_value(self, name: str) -> int:
        """Last value handed out by ``name``"""
        return self.db.scalar(
            select(IdSequence.last_value).where(IdSequence.name == name)
        )
