"""
Pydantic schemas for catalog requests and responses
"""
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict


class ProductBase(BaseModel):
    """Base Product schema with common fields"""
    description: str = Field(..., min_length=1, max_length=30, description="Product description")
    price: Decimal = Field(..., gt=0, max_digits=8, decimal_places=2, description="Unit price (must be positive)")
    stock: int = Field(..., ge=0, description="Stock quantity (must be non-negative)")


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class RestockRequest(BaseModel):
    """Schema for returning stock to a product"""
    quantity: int = Field(..., gt=0, description="Quantity to add")


class ProductResponse(ProductBase):
    """Schema for product response"""
    product_id: int

    model_config = ConfigDict(from_attributes=True)


class StockLevel(BaseModel):
    """Stock remaining for one product"""
    product_id: int
    stock: int
