"""
digital_bhutan.api.routes.products — Marketplace endpoints
===========================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import acting_user_id, get_config, get_engine, get_session
from digital_bhutan.api.schemas import ProductCreate, PurchaseRequest
from digital_bhutan.api.serializers import product_dict, user_dict
from digital_bhutan.config import PlatformConfig
from digital_bhutan.services import points_service, product_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
def list_products(
    category: str | None = Query(None),
    session: Session = Depends(get_session),
):
    return [product_dict(p) for p in product_service.list_products(session, category)]


@router.post("")
def create_product(
    body: ProductCreate,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    product = product_service.create_product(
        engine,
        seller_id=acting_user_id(body.seller_id, cfg),
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        brownie_points_reward=body.brownie_points_reward,
        image_url=body.image_url,
        in_stock=body.in_stock,
    )
    return product_dict(product)


@router.post("/{product_id}/purchase")
def purchase(
    product_id: int,
    body: PurchaseRequest | None = None,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    """Buy a product; the buyer earns its Brownie Point reward."""
    user_id = acting_user_id(body.user_id if body else None, cfg)
    result = points_service.purchase_product(engine, user_id, product_id)
    return {
        "product": product_dict(result.product),
        "user": user_dict(result.user),
        "pointsAwarded": result.points_awarded,
        "tierChanged": result.tier_changed,
    }
