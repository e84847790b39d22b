"""
Pydantic schemas for staff requests and responses
"""
from pydantic import BaseModel, Field, ConfigDict


class StaffCreate(BaseModel):
    """Schema for registering a staff member"""
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)


class StaffResponse(StaffCreate):
    """Schema for staff response"""
    staff_id: int

    model_config = ConfigDict(from_attributes=True)
