"""
digital_bhutan.services.product_service — Marketplace Listings
===============================================================

Listing creation and the in-stock catalogue.  Purchases live in
:func:`digital_bhutan.services.points_service.purchase_product` because they
credit Brownie Points.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import Product
from digital_bhutan.services.errors import InvalidPoints, InvalidRequest
from digital_bhutan.services.user_service import require_user

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def create_product(
    engine: Engine,
    *,
    seller_id: int,
    name: str,
    description: str,
    price: Decimal,
    category: str,
    brownie_points_reward: int = 0,
    image_url: str | None = None,
    in_stock: bool = True,
) -> Product:
    """List a product.  A reward of 0 is valid; negative rewards and
    prices are rejected."""
    if brownie_points_reward < 0:
        raise InvalidPoints(brownie_points_reward)
    if price < 0:
        raise InvalidRequest("Price must not be negative")

    with get_session(engine) as session:
        require_user(session, seller_id)
        product = Product(
            seller_id=seller_id,
            name=name,
            description=description,
            price=price,
            category=category,
            brownie_points_reward=brownie_points_reward,
            image_url=image_url,
            in_stock=in_stock,
        )
        session.add(product)
        session.flush()
        session.refresh(product)

    logger.info("Product %d (%s) listed by user %d", product.id, name, seller_id)
    return product


def list_products(session: Session, category: str | None = None) -> list[Product]:
    """In-stock products, newest first, optionally narrowed to *category*."""
    query = select(Product).where(Product.in_stock.is_(True))
    if category:
        query = query.where(Product.category == category)
    return list(session.scalars(
        query.order_by(Product.created_at.desc(), Product.id.desc())
    ).all())


def list_for_seller(session: Session, seller_id: int) -> list[Product]:
    return list(session.scalars(
        select(Product)
        .where(Product.seller_id == seller_id)
        .order_by(Product.created_at.desc(), Product.id.desc())
    ).all())
