"""
Report Service - sales and staff performance reports

All reports are read-only. Money is Decimal to two places and every
threshold comparison is strictly greater-than.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Set

from sqlalchemy.orm import Session

from retail_orders.config import settings
from retail_orders.dates import year_bounds
from retail_orders.repositories.report_repository import ReportRepository
from retail_orders.schemas.report import (
    ProductValue,
    StaffMember,
    StaffProductMatrix,
    StaffProductRow,
    StaffValue
)

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def line_value(price, quantity: int) -> Decimal:
    """Exact value of ``quantity`` units at ``price``"""
    return (Decimal(str(price)) * quantity).quantize(CENTS)


class ReportService:
    """Service layer for aggregate reports"""

    def __init__(self, db: Session):
        self.repository = ReportRepository(db)

    def product_values(self) -> List[ProductValue]:
        """
        Total value sold of every product, largest first

        Incomplete orders count; products never sold appear with 0.
        """
        values = [
            ProductValue(
                product_id=product_id,
                description=description,
                value=line_value(price, quantity)
            )
            for product_id, description, price, quantity in self.repository.product_quantities()
        ]
        values.sort(key=lambda pv: (-pv.value, pv.product_id))
        return values

    def top_seller_ids(self) -> List[int]:
        """Products whose all-time value sold exceeds TOP_SELLER_THRESHOLD"""
        return sorted(
            pv.product_id for pv in self.product_values()
            if pv.value > settings.TOP_SELLER_THRESHOLD
        )

    def staff_sales_totals(self) -> List[StaffValue]:
        """Lifetime value sold by every staff member, 0 for those with no sales"""
        totals = self._staff_totals()
        return [
            StaffValue(staff_id=staff.staff_id, name=staff.full_name, value=totals.get(staff.staff_id, ZERO))
            for staff in self.repository.all_staff()
        ]

    def top_performers(self) -> List[StaffValue]:
        """Staff whose lifetime sales exceed TOP_PERFORMER_THRESHOLD, largest first"""
        performers = [
            sv for sv in self.staff_sales_totals()
            if sv.value > settings.TOP_PERFORMER_THRESHOLD
        ]
        performers.sort(key=lambda sv: (-sv.value, sv.staff_id))
        return performers

    def staff_product_matrix(self) -> StaffProductMatrix:
        """
        Quantity of each top-selling product sold by each staff member

        Every staff member has a row and every top seller a column; rows are
        ordered by the value of top sellers each member sold.
        """
        product_ids = self.top_seller_ids()
        top = set(product_ids)

        quantities: Dict[int, Dict[int, int]] = defaultdict(dict)
        top_values: Dict[int, Decimal] = defaultdict(lambda: ZERO)
        for staff_id, product_id, price, quantity in self.repository.staff_product_quantities():
            if product_id in top:
                quantities[staff_id][product_id] = quantity
                top_values[staff_id] += line_value(price, quantity)

        rows = [
            StaffProductRow(
                staff_id=staff.staff_id,
                name=staff.full_name,
                quantities={pid: quantities[staff.staff_id].get(pid, 0) for pid in product_ids},
                top_seller_value=top_values[staff.staff_id]
            )
            for staff in self.repository.all_staff()
        ]
        rows.sort(key=lambda row: (-row.top_seller_value, row.staff_id))
        return StaffProductMatrix(product_ids=product_ids, rows=rows)

    def reward_eligibility(self, year: int) -> List[StaffMember]:
        """
        Staff eligible for the annual reward

        A member qualifies when their sales placed in ``year`` exceed
        REWARD_SALES_THRESHOLD and they sold at least one unit of every
        product whose value sold that year exceeds TOP_SELLER_THRESHOLD.

        Raises:
            InvalidDate: If year is outside 1..9998
        """
        start, end = year_bounds(year)

        top_sellers: Set[int] = {
            product_id
            for product_id, price, quantity in self.repository.product_quantities_between(start, end)
            if line_value(price, quantity) > settings.TOP_SELLER_THRESHOLD
        }

        totals: Dict[int, Decimal] = defaultdict(lambda: ZERO)
        sold: Dict[int, Set[int]] = defaultdict(set)
        for staff_id, product_id, price, quantity in self.repository.staff_product_quantities(start, end):
            totals[staff_id] += line_value(price, quantity)
            sold[staff_id].add(product_id)

        return [
            StaffMember(staff_id=staff.staff_id, name=staff.full_name)
            for staff in self.repository.all_staff()
            if totals.get(staff.staff_id, ZERO) > settings.REWARD_SALES_THRESHOLD
            and not (top_sellers - sold.get(staff.staff_id, set()))
        ]

    def _staff_totals(self) -> Dict[int, Decimal]:
        totals: Dict[int, Decimal] = defaultdict(lambda: ZERO)
        for staff_id, _product_id, price, quantity in self.repository.staff_product_quantities():
            totals[staff_id] += line_value(price, quantity)
        return dict(totals)
