"""
Order endpoints.

Orders are served through the cache-aside helper under the ``orders:``
key prefix so they can be invalidated as a group.
"""

from typing import List

from fastapi import APIRouter, Depends

from ...constants import ORDERS_CACHE_PREFIX
from ...models.order import Order
from ...services.cache.cache_service import CacheService
from ..dependencies import get_cache_service

router = APIRouter(tags=["orders"])

ALL_ORDERS_CACHE_KEY = f"{ORDERS_CACHE_PREFIX}all"


async def load_orders() -> List[Order]:
    return [
        Order(id=1, name="Order from CacheHub"),
        Order(id=2, name="Order from Redis"),
        Order(id=3, name="Order from Database"),
    ]


@router.get("/allOrders", response_model=List[Order], name="getAllOrders")
async def get_all_orders(
    cache: CacheService = Depends(get_cache_service),
) -> List[Order]:
    return await cache.get_or_create(ALL_ORDERS_CACHE_KEY, load_orders, List[Order])
