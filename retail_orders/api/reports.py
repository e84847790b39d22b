"""
Report API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from retail_orders.api.errors import to_http_error
from retail_orders.database import get_db
from retail_orders.exceptions import RetailOrderError
from retail_orders.services.report_service import ReportService
from retail_orders.schemas.report import ProductValue, StaffMember, StaffProductMatrix, StaffValue

router = APIRouter(prefix="/reports", tags=["reports"])


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    """Dependency to get ReportService instance"""
    return ReportService(db)


@router.get("/product-values", response_model=List[ProductValue], summary="Value sold per product")
def product_values(service: ReportService = Depends(get_report_service)):
    """Total value sold of every product, largest first (unsold products at 0)"""
    return service.product_values()


@router.get("/staff-totals", response_model=List[StaffValue], summary="Lifetime sales per staff member")
def staff_totals(service: ReportService = Depends(get_report_service)):
    """Lifetime value sold by every staff member"""
    return service.staff_sales_totals()


@router.get("/top-performers", response_model=List[StaffValue], summary="Top performing staff")
def top_performers(service: ReportService = Depends(get_report_service)):
    """Staff whose lifetime sales exceed the top performer threshold"""
    return service.top_performers()


@router.get("/top-seller-matrix", response_model=StaffProductMatrix, summary="Top sellers sold by staff")
def top_seller_matrix(service: ReportService = Depends(get_report_service)):
    """Quantity of each top-selling product sold by each staff member"""
    return service.staff_product_matrix()


@router.get("/rewards/{year}", response_model=List[StaffMember], summary="Reward eligible staff")
def rewards(
    year: int,
    service: ReportService = Depends(get_report_service)
):
    """
    Staff eligible for the annual reward

    - **year**: Calendar year, e.g. 2017
    """
    try:
        return service.reward_eligibility(year)
    except RetailOrderError as e:
        raise to_http_error(e)
