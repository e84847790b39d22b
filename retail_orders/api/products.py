"""
Product API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from retail_orders.api.errors import to_http_error
from retail_orders.database import get_db
from retail_orders.exceptions import RetailOrderError
from retail_orders.services.catalog_service import CatalogService
from retail_orders.schemas.product import ProductCreate, ProductResponse, RestockRequest

router = APIRouter(prefix="/products", tags=["products"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency to get CatalogService instance"""
    return CatalogService(db)


@router.get("", response_model=List[ProductResponse], summary="Get all products")
def get_products(service: CatalogService = Depends(get_catalog_service)):
    """Retrieve all products ordered by ID"""
    return service.get_all_products()


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Retrieve a specific product by ID

    - **product_id**: Product ID
    """
    product = service.get_product_by_id(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )
    return product


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    product_data: ProductCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Create a new product

    - **description**: Product description (required, up to 30 characters)
    - **price**: Unit price (required, must be positive)
    - **stock**: Stock quantity (required, must be non-negative)
    """
    try:
        return service.create_product(product_data)
    except RetailOrderError as e:
        raise to_http_error(e)


@router.patch("/{product_id}/restock", response_model=ProductResponse, summary="Restock product")
def restock_product(
    product_id: int,
    restock_data: RestockRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Add stock to a product

    - **product_id**: Product ID
    - **quantity**: Quantity to add (must be positive)
    """
    try:
        return service.restock(product_id, restock_data.quantity)
    except RetailOrderError as e:
        raise to_http_error(e)
