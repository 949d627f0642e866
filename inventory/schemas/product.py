"""Request/response schemas for product endpoints."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from inventory.schemas.common import CamelModel


class ProductWrite(BaseModel):
    """Body for creating or replacing a product. Validation rules live in ProductService."""

    name: str = Field(default="", max_length=255, description="Product name (required)")
    description: str = Field(default="", description="Free-text description")
    price: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Unit price; finite, and must be > 0 on create",
    )


class ProductView(CamelModel):
    id: int
    name: str
    description: str
    price: float
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite returns naive values for DateTime(timezone=True); they are stored as UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)


class DeletedProduct(CamelModel):
    deleted_id: int
