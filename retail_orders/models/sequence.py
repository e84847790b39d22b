"""
SQLAlchemy identity sequence model
"""
from sqlalchemy import Column, Integer, String, CheckConstraint
from retail_orders.database import Base


class IdSequence(Base):
    """
    Monotonic identity generator, one row per identity-bearing table

    Values handed out are never reused, even when the write they were
    allocated for is later rejected.
    """

    __tablename__ = "id_sequence"

    PRODUCT = "product"
    ORDER = "orders"
    STAFF = "staff"
    NAMES = (PRODUCT, ORDER, STAFF)

    name = Column(String(30), primary_key=True)
    last_value = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint('last_value >= 0', name='check_sequence_non_negative'),
    )

    def __repr__(self):
        return f"<IdSequence(name='{self.name}', last_value={self.last_value})>"
