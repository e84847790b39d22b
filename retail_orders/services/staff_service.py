"""
Staff Service - staff member registration and lookup
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from retail_orders.exceptions import from_store_error
from retail_orders.models.sequence import IdSequence
from retail_orders.repositories.sequence_repository import SequenceRepository
from retail_orders.repositories.staff_repository import StaffRepository
from retail_orders.schemas.staff import StaffCreate, StaffResponse

logger = logging.getLogger(__name__)


class StaffService:
    """Service layer for staff members"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = StaffRepository(db)
        self.sequence_repository = SequenceRepository(db)

    def get_all_staff(self) -> List[StaffResponse]:
        return [StaffResponse.model_validate(s) for s in self.repository.get_all()]

    def get_staff_by_id(self, staff_id: int) -> Optional[StaffResponse]:
        staff = self.repository.get_by_id(staff_id)
        if not staff:
            return None
        return StaffResponse.model_validate(staff)

    def create_staff(self, staff_data: StaffCreate) -> StaffResponse:
        """Register a staff member with an ID from the staff sequence"""
        try:
            staff_id = self.sequence_repository.next_value(IdSequence.STAFF)
            staff = self.repository.create(staff_id, staff_data.first_name, staff_data.last_name)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise from_store_error(e, f"Staff member {staff_data.first_name} {staff_data.last_name} was rejected", stage="staff") from e

        logger.info("Staff member %s registered as %s", staff.full_name, staff.staff_id)
        return StaffResponse.model_validate(staff)
