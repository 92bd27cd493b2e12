# =============================================================================
# core/services/product_service.py - Product Catalog Business Logic
# =============================================================================
# Ownership-scoped CRUD over farmer-listed products, plus the public listing.
#
# Every write is one statement filtered by both the product id and the
# owner's id. A product that doesn't exist and one owned by someone else
# look the same to the caller: not found.
# =============================================================================

import logging
from typing import Any

from supabase import Client

from app.exceptions import ProductNotFoundError, ValidationFailedError
from core.models.product import ProductCreate, ProductUpdate
from core.models.user import Claims, UserRole, UserStatus
from lib.supabase_client import SupabaseClientError, run_query

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"

# Public listing: product columns plus the owner, inner-joined through
# products.farmer_id so rows of unapproved farmers drop out of the result.
PUBLIC_LISTING_COLUMNS = (
    "id, name, price, quantity, image_url, description, created_at, "
    "users!inner(name, role, status)"
)


class ProductService:
    """
    Service for product catalog operations.

    Callers are expected to have passed the approved-farmer guard before
    calling create/update/delete; the service only enforces ownership.

    Args:
        client: The shared Supabase client
    """

    def __init__(self, client: Client):
        self.client = client

    def list_public(self) -> list[dict[str, Any]]:
        """
        List products of approved farmers, newest first.

        The owner's status is read through the join on every call, so a
        farmer's products appear the moment they are approved.

        Returns:
            List of product dicts with a `farmer_name` key
        """
        response = run_query(
            self.client.table(PRODUCTS_TABLE)
            .select(PUBLIC_LISTING_COLUMNS)
            .eq("users.role", UserRole.FARMER.value)
            .eq("users.status", UserStatus.APPROVED.value)
            .order("created_at", desc=True),
            "LIST_PRODUCTS_FAILED",
        )

        products = []
        for row in response.data or []:
            farmer = row.pop("users", None) or {}
            row["farmer_name"] = farmer.get("name")
            products.append(row)
        return products

    def create(self, owner: Claims, fields: ProductCreate) -> dict[str, Any]:
        """
        List a new product owned by the caller.

        name, price and quantity must all be present and truthy, so a
        quantity of 0 is rejected here as missing.

        Returns:
            The created product row

        Raises:
            ValidationFailedError: A required field is missing
        """
        if not fields.name or not fields.price or not fields.quantity:
            raise ValidationFailedError("name, price, quantity are required")

        data = {
            "farmer_id": owner.id,
            "name": fields.name,
            "price": fields.price,
            "quantity": fields.quantity,
            "image_url": fields.image_url or None,
            "description": fields.description or None,
        }

        response = run_query(
            self.client.table(PRODUCTS_TABLE).insert(data),
            "INSERT_PRODUCT_FAILED",
            farmer_id=owner.id,
        )
        if not response.data:
            raise SupabaseClientError("Insert returned no data", code="INSERT_PRODUCT_FAILED")

        product = response.data[0]
        logger.info(f"Farmer {owner.id} created product {product['id']}")
        return product

    def update(
        self,
        owner: Claims,
        product_id: int,
        changes: ProductUpdate,
    ) -> dict[str, Any]:
        """
        Partially update a product owned by the caller.

        Fields that are omitted or null keep their stored value, so an
        optional field can be replaced but not cleared.

        Returns:
            The product row after the update

        Raises:
            ProductNotFoundError: No product with this id is owned by the caller
        """
        data = changes.model_dump(exclude_none=True)

        if not data:
            # Nothing to change; still only answer for owned products
            response = run_query(
                self.client.table(PRODUCTS_TABLE)
                .select("*")
                .eq("id", product_id)
                .eq("farmer_id", owner.id)
                .limit(1),
                "FETCH_PRODUCT_FAILED",
                product_id=product_id,
            )
        else:
            response = run_query(
                self.client.table(PRODUCTS_TABLE)
                .update(data)
                .eq("id", product_id)
                .eq("farmer_id", owner.id),
                "UPDATE_PRODUCT_FAILED",
                product_id=product_id,
            )

        rows = response.data or []
        if not rows:
            raise ProductNotFoundError(product_id)

        if data:
            logger.info(f"Farmer {owner.id} updated product {product_id}: {sorted(data)}")
        return rows[0]

    def delete(self, owner: Claims, product_id: int) -> None:
        """
        Delete a product owned by the caller.

        Raises:
            ProductNotFoundError: No product with this id is owned by the caller
        """
        response = run_query(
            self.client.table(PRODUCTS_TABLE)
            .delete()
            .eq("id", product_id)
            .eq("farmer_id", owner.id),
            "DELETE_PRODUCT_FAILED",
            product_id=product_id,
        )
        if not response.data:
            raise ProductNotFoundError(product_id)

        logger.info(f"Farmer {owner.id} deleted product {product_id}")
