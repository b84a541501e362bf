"""REST controller for the Products resource."""

import logging
from decimal import Decimal
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Request, Response, status
from pydantic import BaseModel, Field, field_serializer

from product_api.models import Product
from product_api.repositories import ProductRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

# Range of an SQLite INTEGER column
MIN_PRODUCT_ID = -(2**63)
MAX_PRODUCT_ID = 2**63 - 1

ProductId = Annotated[int, Path(ge=MIN_PRODUCT_ID, le=MAX_PRODUCT_ID)]


class ProductPayload(BaseModel):
    """Product as it travels over HTTP."""

    id: int = Field(default=0, ge=MIN_PRODUCT_ID, le=MAX_PRODUCT_ID)  # ignored on create
    name: str
    description: Optional[str] = None
    price: Decimal = Field(max_digits=18, decimal_places=2)  # DECIMAL(18,2)
    category: str

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)

    def to_product(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            description=self.description,
            price=self.price,
            category=self.category,
        )

    @classmethod
    def from_product(cls, product: Product) -> "ProductPayload":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
        )


def get_product_repository(request: Request) -> ProductRepository:
    """Return the repository wired into the application at startup."""
    return request.app.state.product_repository


@router.get("", response_model=List[ProductPayload])
def list_products(repository: ProductRepository = Depends(get_product_repository)):
    """List every product."""
    return [ProductPayload.from_product(product) for product in repository.list_all()]


@router.get("/{product_id}", response_model=ProductPayload)
def get_product(product_id: ProductId, repository: ProductRepository = Depends(get_product_repository)):
    """Fetch one product, or 404 with an empty body."""
    product = repository.get_by_id(product_id)
    if product is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return ProductPayload.from_product(product)


@router.post("", response_model=ProductPayload, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductPayload,
    request: Request,
    response: Response,
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Insert a product and echo the submitted body.

    The Location header is built from the submitted id, not the one the store
    assigned, since the insert never reads the generated id back.
    """
    affected = repository.create(payload.to_product())
    logger.info(f"Created product '{payload.name}' ({affected} row(s) affected)")

    response.headers["Location"] = str(request.url_for("get_product", product_id=payload.id))
    return payload


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_product(
    product_id: ProductId,
    payload: ProductPayload,
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    """Replace every field of a product; path and body ids must agree."""
    if product_id != payload.id:
        logger.warning(f"Rejected update: path id {product_id} does not match body id {payload.id}")
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    affected = repository.update(payload.to_product())
    if affected == 0:
        # Still answered with 204, callers get no not-found signal on writes
        logger.warning(f"Update of product {product_id} affected no rows")
    else:
        logger.info(f"Updated product {product_id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: ProductId,
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    """Delete a product by id."""
    affected = repository.delete(product_id)
    if affected == 0:
        logger.warning(f"Delete of product {product_id} affected no rows")
    else:
        logger.info(f"Deleted product {product_id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
