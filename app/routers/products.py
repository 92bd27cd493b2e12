# =============================================================================
# app/routers/products.py - Product Catalog Endpoints
# =============================================================================
# GET is public. Writes require an approved farmer, and update/delete only
# touch the caller's own products (anything else is a 404).
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import RequireApprovedFarmer, require
from app.dependencies import ProductServiceDep
from core.models.product import ProductCreate, ProductResponse, ProductUpdate, PublicProduct
from core.models.user import Claims

router = APIRouter()

ApprovedFarmer = Annotated[Claims, Depends(require(RequireApprovedFarmer()))]
ProductId = Annotated[int, Path(description="Product ID")]


@router.get("", response_model=list[PublicProduct])
def list_products(products: ProductServiceDep):
    """
    List products from approved farmers, newest first.
    """
    return products.list_public()


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    request: ProductCreate,
    farmer: ApprovedFarmer,
    products: ProductServiceDep,
):
    """
    List a new product for sale.

    Raises:
        400: name, price or quantity missing
        401: Missing or invalid token
        403: Not a farmer, or farmer not approved yet
    """
    return products.create(farmer, request)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: ProductId,
    request: ProductUpdate,
    farmer: ApprovedFarmer,
    products: ProductServiceDep,
):
    """
    Update some fields of one of your products.

    Omitted or null fields keep their current value.

    Raises:
        404: Product doesn't exist or belongs to another farmer
    """
    return products.update(farmer, product_id, request)


@router.delete("/{product_id}")
def delete_product(
    product_id: ProductId,
    farmer: ApprovedFarmer,
    products: ProductServiceDep,
):
    """
    Delete one of your products.

    Raises:
        404: Product doesn't exist or belongs to another farmer
    """
    products.delete(farmer, product_id)
    return {"ok": True}
