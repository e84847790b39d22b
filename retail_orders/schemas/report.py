"""
Pydantic schemas for report rows
"""
from decimal import Decimal
from typing import Dict, List
from pydantic import BaseModel


class ProductValue(BaseModel):
    """Total value sold of one product"""
    product_id: int
    description: str
    value: Decimal


class StaffValue(BaseModel):
    """Total value sold by one staff member"""
    staff_id: int
    name: str
    value: Decimal


class StaffMember(BaseModel):
    """A staff member named in a report"""
    staff_id: int
    name: str


class StaffProductRow(BaseModel):
    """Quantities of each top-selling product sold by one staff member"""
    staff_id: int
    name: str
    quantities: Dict[int, int]
    top_seller_value: Decimal


class StaffProductMatrix(BaseModel):
    """Staff x top-selling product quantities; every row has every column"""
    product_ids: List[int]
    rows: List[StaffProductRow]
