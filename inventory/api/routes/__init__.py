"""HTTP routes mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from inventory.api.routes import auth, health, products

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
