"""Product endpoints: paginated listing, lookup, and admin-only create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from inventory.api.access import get_current_user, require_admin
from inventory.core.config import Settings, get_settings
from inventory.core.database import get_db
from inventory.schemas.auth import CurrentUser
from inventory.schemas.common import ApiResponse, Page
from inventory.schemas.product import DeletedProduct, ProductView, ProductWrite
from inventory.services.products import MAX_PAGE_NUMBER, ProductService

router = APIRouter()


def get_product_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ProductService:
    return ProductService(db, settings)


@router.get("", response_model=ApiResponse[Page[ProductView]])
def list_products(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
    page_number: Annotated[int, Query(alias="pageNumber", le=MAX_PAGE_NUMBER)] = 1,
    page_size: Annotated[int | None, Query(alias="pageSize")] = None,
    name: Annotated[str | None, Query(max_length=255)] = None,
    sort_by_price: Annotated[str | None, Query(alias="sortByPrice")] = None,
) -> ApiResponse[Page[ProductView]]:
    """
    List products with pagination, name filtering and price sorting.

    pageSize is capped at 50. sortByPrice accepts 'asc' or 'desc'; otherwise
    products are ordered by id.
    """
    page = service.list(page_number, page_size, name, sort_by_price)
    payload = Page[ProductView](
        items=[ProductView.model_validate(p) for p in page.items],
        page_number=page.page_number,
        page_size=page.page_size,
        total_count=page.total_count,
        total_pages=page.total_pages,
        has_previous=page.has_previous,
        has_next=page.has_next,
    )
    return ApiResponse[Page[ProductView]].ok(payload, "Products retrieved successfully")


@router.get("/{product_id}", response_model=ApiResponse[ProductView])
def get_product(
    product_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ApiResponse[ProductView]:
    product = service.get(product_id)
    return ApiResponse[ProductView].ok(ProductView.model_validate(product))


@router.post(
    "",
    response_model=ApiResponse[ProductView],
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    body: ProductWrite,
    request: Request,
    response: Response,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ApiResponse[ProductView]:
    """Create a product (Administrator only). Price must be greater than 0."""
    product = service.create(body.name, body.description, body.price)
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return ApiResponse[ProductView].ok(ProductView.model_validate(product), "Product created successfully")


@router.put("/{product_id}", response_model=ApiResponse[ProductView])
def update_product(
    product_id: int,
    body: ProductWrite,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ApiResponse[ProductView]:
    """Replace a product's name, description and price (Administrator only)."""
    product = service.update(product_id, body.name, body.description, body.price)
    return ApiResponse[ProductView].ok(ProductView.model_validate(product), "Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[DeletedProduct])
def delete_product(
    product_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ApiResponse[DeletedProduct]:
    """Delete a product permanently (Administrator only)."""
    deleted_id = service.delete(product_id)
    return ApiResponse[DeletedProduct].ok(DeletedProduct(deleted_id=deleted_id), "Product deleted successfully")
