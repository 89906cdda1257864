"""Inventory routes.

Routes:
- GET /inventory            - Stock items with their stock status
- GET /inventory/categories - Categories present in stock, first-seen order
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from tradedesk.classification.status import StockStatus
from tradedesk.errors import ValidationError
from tradedesk.filters.records import ALL, InventoryCriteria, distinct_categories, filter_inventory
from tradedesk.integration.api_client import PersistenceClient
from tradedesk.web.dependencies import get_client
from tradedesk.web.models import InventoryView

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=list[InventoryView])
async def list_inventory(
    search: str = "",
    category: str = ALL,
    trade_specific: Optional[bool] = None,
    stock: str = ALL,
    client: PersistenceClient = Depends(get_client),
):
    """Inventory filtered by search, category, stock tier and trade flag.

    Omit ``trade_specific`` for all items; ``true``/``false`` restricts to
    trade-specific or general stock.
    """
    if stock != ALL and stock not in {s.value for s in StockStatus}:
        raise ValidationError({"stock": f"Unknown stock status '{stock}'"})
    criteria = InventoryCriteria(
        search=search, category=category, trade_specific=trade_specific, stock=stock
    )
    items = await client.list_inventory()
    return [InventoryView.from_item(item) for item in filter_inventory(items, criteria)]


@router.get("/categories", response_model=list[str])
async def list_categories(client: PersistenceClient = Depends(get_client)):
    return distinct_categories(await client.list_inventory())
