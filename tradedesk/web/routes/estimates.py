"""Estimate routes.

Routes:
- POST /estimates/preview - Price a set of lines for a trade
"""

from __future__ import annotations

from fastapi import APIRouter

from tradedesk.forms.estimates import EstimateDraft
from tradedesk.models import Estimate
from tradedesk.web.models import EstimateRequest

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.post("/preview", response_model=Estimate)
async def preview_estimate(body: EstimateRequest):
    """Build an estimate from free lines and trade quick items; nothing is stored."""
    draft = EstimateDraft(
        body.trade,
        tax_rate_percent=body.tax_rate_percent,
        job_id=body.job_id,
    )
    for line in body.lines:
        if line.quick_item_id:
            draft.add_quick_item(line.quick_item_id, quantity=line.quantity)
        else:
            draft.add_line_item(
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                category=line.category,
            )
    draft.set_discount(body.discount)
    return draft.build()
