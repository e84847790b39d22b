"""
Staff API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from retail_orders.api.errors import to_http_error
from retail_orders.database import get_db
from retail_orders.exceptions import RetailOrderError
from retail_orders.services.staff_service import StaffService
from retail_orders.schemas.staff import StaffCreate, StaffResponse

router = APIRouter(prefix="/staff", tags=["staff"])


def get_staff_service(db: Session = Depends(get_db)) -> StaffService:
    return StaffService(db)


@router.get("", response_model=List[StaffResponse], summary="Get all staff")
def get_staff(service: StaffService = Depends(get_staff_service)):
    return service.get_all_staff()


@router.get("/{staff_id}", response_model=StaffResponse, summary="Get staff member by ID")
def get_staff_member(
    staff_id: int,
    service: StaffService = Depends(get_staff_service)
):
    staff = service.get_staff_by_id(staff_id)
    if not staff:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Staff member with id={staff_id} not found"
        )
    return staff


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED, summary="Register staff member")
def create_staff(
    staff_data: StaffCreate,
    service: StaffService = Depends(get_staff_service)
):
    """
    Register a new staff member

    - **first_name**: First name (required)
    - **last_name**: Last name (required)
    """
    try:
        return service.create_staff(staff_data)
    except RetailOrderError as e:
        raise to_http_error(e)
