"""Customer routes.

Routes:
- GET /customers - Customers matching search and property type
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tradedesk.errors import ValidationError
from tradedesk.filters.records import ALL, CustomerCriteria, filter_customers
from tradedesk.integration.api_client import PersistenceClient
from tradedesk.models import PropertyType
from tradedesk.web.dependencies import get_client
from tradedesk.web.models import CustomerView

router = APIRouter(tags=["customers"])


@router.get("/customers", response_model=list[CustomerView])
async def list_customers(
    search: str = "",
    property_type: str = ALL,
    client: PersistenceClient = Depends(get_client),
):
    if property_type != ALL and property_type not in {p.value for p in PropertyType}:
        raise ValidationError({"property_type": f"Unknown property type '{property_type}'"})
    criteria = CustomerCriteria(search=search, property_type=property_type)
    customers = await client.list_customers()
    return [CustomerView.from_customer(c) for c in filter_customers(customers, criteria)]
