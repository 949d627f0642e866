"""Product service: CRUD and paginated, filtered, sorted listing over the products table."""

import logging
import math
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Query, Session

from inventory.core.errors import InvalidInputError, NotFoundError
from inventory.models import Product
from inventory.repositories import Repository

if TYPE_CHECKING:
    from inventory.core.config import Settings

logger = logging.getLogger(__name__)

SORT_ASC = "asc"
SORT_DESC = "desc"

# Keeps (page_number - 1) * page_size well inside a 64-bit OFFSET.
MAX_PAGE_NUMBER = 1_000_000


class ProductPage(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    items: list[Product]
    page_number: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


def clamp_page(
    page_number: int | None,
    page_size: int | None,
    default_size: int,
    max_size: int,
) -> tuple[int, int]:
    """Normalize paging input: 1 <= page_number <= MAX_PAGE_NUMBER and 1 <= page_size <= max_size."""
    number = min(max(page_number or 1, 1), MAX_PAGE_NUMBER)
    size = default_size if page_size is None else page_size
    return number, min(max(size, 1), max_size)


def _order(query: Query, sort_by_price: str | None) -> Query:
    direction = (sort_by_price or "").strip().lower()
    if direction == SORT_ASC:
        return query.order_by(Product.price.asc(), Product.id.asc())
    if direction == SORT_DESC:
        return query.order_by(Product.price.desc(), Product.id.asc())
    return query.order_by(Product.id.asc())


class ProductService:
    """Product operations. Price must be positive on create; update only rejects non-finite prices."""

    def __init__(self, db: Session, settings: "Settings") -> None:
        self.products: Repository[Product] = Repository(db, Product)
        self.settings = settings

    def list(
        self,
        page_number: int | None = 1,
        page_size: int | None = None,
        name: str | None = None,
        sort_by_price: str | None = None,
    ) -> ProductPage:
        """
        One page of products.

        name is a substring filter (case sensitivity follows the database
        collation). sort_by_price is 'asc' or 'desc' in any case; anything else
        orders by id. total_count is taken before paging is applied.
        """
        number, size = clamp_page(
            page_number,
            page_size,
            self.settings.DEFAULT_PAGE_SIZE,
            self.settings.MAX_PAGE_SIZE,
        )
        query = self.products.query()
        if name and name.strip():
            query = query.filter(Product.name.contains(name, autoescape=True))
        total_count = self.products.count(query)
        items = self.products.list_page(
            _order(query, sort_by_price),
            offset=(number - 1) * size,
            limit=size,
        )
        return ProductPage(items=items, page_number=number, page_size=size, total_count=total_count)

    def get(self, product_id: int) -> Product:
        product = self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create(self, name: str, description: str, price: float) -> Product:
        if not name or not name.strip():
            raise InvalidInputError("Product name is required")
        if not math.isfinite(price) or price <= 0:
            raise InvalidInputError("Price must be greater than 0")
        product = self.products.insert(
            Product(
                name=name,
                description=description or "",
                price=price,
                created_at=datetime.now(UTC),
            )
        )
        logger.info("Created product id=%s name=%s", product.id, product.name)
        return product

    def update(self, product_id: int, name: str, description: str, price: float) -> Product:
        """Overwrite name, description and price. Missing id wins over an invalid body."""
        product = self.get(product_id)
        if not name or not name.strip():
            raise InvalidInputError("Product name is required")
        if not math.isfinite(price):
            raise InvalidInputError("Price must be a finite number")
        product.name = name
        product.description = description or ""
        product.price = price
        product = self.products.update(product)
        logger.info("Updated product id=%s", product.id)
        return product

    def delete(self, product_id: int) -> int:
        """Remove a product permanently; returns the deleted id."""
        product = self.get(product_id)
        self.products.delete(product)
        logger.info("Deleted product id=%s", product_id)
        return product_id
