"""
Services package
"""
from retail_orders.services.order_service import OrderService
from retail_orders.services.catalog_service import CatalogService
from retail_orders.services.staff_service import StaffService
from retail_orders.services.report_service import ReportService

__all__ = ["OrderService", "CatalogService", "StaffService", "ReportService"]
