"""
SQLAlchemy Staff and staff assignment models
"""
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from retail_orders.database import Base


class Staff(Base):
    """Staff member database model"""

    __tablename__ = "staff"

    staff_id = Column(Integer, primary_key=True, autoincrement=False)
    first_name = Column(String(30), nullable=False)
    last_name = Column(String(30), nullable=False)

    __table_args__ = (
        CheckConstraint('staff_id > 0', name='check_staff_id_positive'),
        CheckConstraint('LENGTH(first_name) > 0', name='check_staff_first_name_not_empty'),
        CheckConstraint('LENGTH(last_name) > 0', name='check_staff_last_name_not_empty'),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Staff(staff_id={self.staff_id}, name='{self.full_name}')>"


class StaffOrderAssignment(Base):
    """Links an order to the one staff member who processed it"""

    __tablename__ = "staff_order_assignment"

    # One staff member per order
    order_id = Column(Integer, ForeignKey("orders.order_id"), primary_key=True)
    staff_id = Column(Integer, ForeignKey("staff.staff_id"), nullable=False, index=True)

    def __repr__(self):
        return f"<StaffOrderAssignment(order_id={self.order_id}, staff_id={self.staff_id})>"
