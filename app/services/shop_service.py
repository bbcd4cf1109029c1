from typing import Any, List, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions.exceptions import ShopNotFoundError
from app.models.base_model import utcnow
from app.models.product import Product
from app.models.shop import Shop
from app.schemas.shop import ProductCreate, ShopCreate, ShopUpdate
from app.services.list_query import ListQuery
from app.utils.log import app_logger
from app.utils.pagination import PaginationOptions, apply_pagination

# soft-delete flag is internal bookkeeping
PRODUCT_PROJECTION = {"isDeleted": 0}


def like_pattern(text: str) -> str:
    """Substring LIKE pattern with `%`, `_` and `\\` escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ShopService:
    """DB access for shops and their products.

    Keeps ORM access out of the routers; list methods take normalized
    `PaginationOptions` and return `(items, total)`.
    """

    @staticmethod
    def list_shops(db: Session, options: PaginationOptions) -> Tuple[List[Any], int]:
        query = ListQuery(db, Shop)
        if options.q:
            query.where(Shop.name.ilike(like_pattern(options.q), escape="\\"))
        if options.status:
            query.where(Shop.status == options.status)
        total = query.count()
        items = apply_pagination(query, options).all()
        return items, total

    @staticmethod
    def get_shop(db: Session, shop_id: int) -> Shop:
        shop = db.get(Shop, shop_id)
        if shop is None:
            raise ShopNotFoundError(shop_id)
        return shop

    @staticmethod
    def create_shop(db: Session, payload: ShopCreate) -> Shop:
        shop = Shop(**payload.model_dump(), status="pending")
        db.add(shop)
        db.commit()
        db.refresh(shop)
        app_logger.info("shop.created", shop_id=shop.id, name=shop.name)
        return shop

    @staticmethod
    def update_shop(db: Session, shop_id: int, payload: ShopUpdate) -> Shop:
        shop = ShopService.get_shop(db, shop_id)
        changes = payload.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(shop, field, value)
        shop.updated_at = utcnow()
        db.add(shop)
        db.commit()
        db.refresh(shop)
        app_logger.info("shop.updated", shop_id=shop.id, fields=sorted(changes))
        return shop

    @staticmethod
    def list_products(db: Session, shop_id: int, options: PaginationOptions) -> Tuple[List[Any], int]:
        ShopService.get_shop(db, shop_id)
        query = ListQuery(db, Product).where(Product.shop_id == shop_id, Product.is_deleted.is_(False))
        if options.q:
            query.where(Product.name.ilike(like_pattern(options.q), escape="\\"))
        total = query.count()
        items = apply_pagination(query, options, PRODUCT_PROJECTION).all()
        return items, total

    @staticmethod
    def create_product(db: Session, shop_id: int, payload: ProductCreate) -> Product:
        ShopService.get_shop(db, shop_id)
        product = Product(shop_id=shop_id, **payload.model_dump())
        db.add(product)
        db.commit()
        db.refresh(product)
        app_logger.info("product.created", shop_id=shop_id, product_id=product.id)
        return product
