from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from app.api.listing import cached_page
from app.schemas.shop import ProductCreate, ShopCreate, ShopUpdate
from app.services.database import get_db
from app.services.memory_cache import MemoryCache, get_cache
from app.services.shop_service import ShopService
from app.utils.log import app_logger
from app.utils.pagination import parse_pagination

router = APIRouter(prefix="/shops", tags=["Shops"])

SHOPS_LIST_PREFIX = "shops:list:"


def products_prefix(shop_id: int) -> str:
    return f"products:{shop_id}:"


@router.get("")
def list_shops(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    cache: MemoryCache = Depends(get_cache),
) -> Dict[str, Any]:
    """List shops. Query: page, limit, sort (createdAt, updatedAt, ratingAvg), q, status."""
    options = parse_pagination(request.query_params)
    return cached_page(response, cache, SHOPS_LIST_PREFIX, options, lambda: ShopService.list_shops(db, options))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_shop(
    payload: ShopCreate,
    db: Session = Depends(get_db),
    cache: MemoryCache = Depends(get_cache),
) -> Dict[str, Any]:
    shop = ShopService.create_shop(db, payload)
    removed = cache.invalidate_prefix(SHOPS_LIST_PREFIX)
    app_logger.info("api.shops.create", shop_id=shop.id, invalidated=removed)
    return {"ok": True, "data": {"shop": jsonable_encoder(shop)}}


@router.get("/{shop_id}")
def get_shop(shop_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    shop = ShopService.get_shop(db, shop_id)
    return {"ok": True, "data": {"shop": jsonable_encoder(shop)}}


@router.patch("/{shop_id}")
def update_shop(
    shop_id: int,
    payload: ShopUpdate,
    db: Session = Depends(get_db),
    cache: MemoryCache = Depends(get_cache),
) -> Dict[str, Any]:
    shop = ShopService.update_shop(db, shop_id, payload)
    removed = cache.invalidate_prefix(SHOPS_LIST_PREFIX)
    removed += cache.invalidate_prefix(products_prefix(shop_id))
    app_logger.info("api.shops.update", shop_id=shop_id, invalidated=removed)
    return {"ok": True, "data": {"shop": jsonable_encoder(shop)}}


@router.get("/{shop_id}/products")
def list_products(
    shop_id: int,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    cache: MemoryCache = Depends(get_cache),
) -> Dict[str, Any]:
    options = parse_pagination(request.query_params)
    return cached_page(
        response, cache, products_prefix(shop_id), options,
        lambda: ShopService.list_products(db, shop_id, options),
    )


@router.post("/{shop_id}/products", status_code=status.HTTP_201_CREATED)
def create_product(
    shop_id: int,
    payload: ProductCreate,
    db: Session = Depends(get_db),
    cache: MemoryCache = Depends(get_cache),
) -> Dict[str, Any]:
    product = ShopService.create_product(db, shop_id, payload)
    removed = cache.invalidate_prefix(products_prefix(shop_id))
    app_logger.info("api.products.create", shop_id=shop_id, product_id=product.id, invalidated=removed)
    return {"ok": True, "data": {"product": jsonable_encoder(product)}}
