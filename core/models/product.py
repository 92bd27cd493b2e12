# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the API contract for the product catalog:
# - ProductCreate: Body of POST /api/products
# - ProductUpdate: Body of PUT /api/products/{id} (partial)
# - ProductResponse: A full product row
# - PublicProduct: A listing entry with the farmer's name attached
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """
    Schema for listing a new product.

    name, price and quantity are declared optional here so that a missing
    field and a falsy one (0, "") get the same "required" error from the
    service.

    Example:
        {"name": "Tomatoes", "price": 2.5, "quantity": 40, "description": "Vine ripened"}
    """
    name: str | None = Field(default=None, max_length=200)
    price: float | None = Field(default=None, gt=0, description="Unit price")
    quantity: int | None = Field(default=None, ge=0, description="Units available")
    image_url: str | None = Field(default=None, max_length=2048)
    description: str | None = Field(default=None)


class ProductUpdate(BaseModel):
    """
    Schema for a partial product update.

    Fields left out (or sent as null) keep their stored value.
    """
    name: str | None = Field(default=None, min_length=1, max_length=200)
    price: float | None = Field(default=None, gt=0)
    quantity: int | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, max_length=2048)
    description: str | None = Field(default=None)


class ProductResponse(BaseModel):
    """A product row as stored."""
    id: int
    farmer_id: int
    name: str
    price: float
    quantity: int
    image_url: str | None = None
    description: str | None = None
    created_at: datetime | None = None


class PublicProduct(BaseModel):
    """A product in the public listing."""
    id: int
    name: str
    price: float
    quantity: int
    image_url: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    farmer_name: str
