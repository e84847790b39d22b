"""
Staff Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from retail_orders.models.staff import Staff


class StaffRepository:
    """Repository for staff members"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Staff]:
        return list(self.db.scalars(select(Staff).order_by(Staff.staff_id)))

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        return self.db.get(Staff, staff_id)

    def exists(self, staff_id: int) -> bool:
        return self.db.scalar(
            select(Staff.staff_id).where(Staff.staff_id == staff_id)
        ) is not None

    def create(self, staff_id: int, first_name: str, last_name: str) -> Staff:
        """Stage a new staff member; the caller commits"""
        staff = Staff(staff_id=staff_id, first_name=first_name, last_name=last_name)
        self.db.add(staff)
        self.db.flush()
        return staff
