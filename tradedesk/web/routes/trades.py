"""Trade registry routes.

Routes:
- GET  /trades                                 - All trades, registry order
- GET  /trades/{trade_id}                      - Full trade configuration
- GET  /trades/{trade_id}/fields               - Trade-specific job form fields
- GET  /trades/{trade_id}/checklists/{tpl_id}  - Fresh checklist from a template
- POST /trades/{trade_id}/jobs/assemble        - Validate and assemble a job form
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from tradedesk.forms.assembler import assemble
from tradedesk.forms.fields import fields_for
from tradedesk.models import ChecklistItem, TradeConfig
from tradedesk.trades.registry import all_trades, checklist_from_template, lookup
from tradedesk.web.models import AssembleRequest, FieldOut, TradeSummary

router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("", response_model=list[TradeSummary])
async def list_trades():
    return [TradeSummary.from_config(config) for config in all_trades()]


@router.get("/{trade_id}", response_model=TradeConfig)
async def get_trade(trade_id: str):
    return lookup(trade_id)


@router.get("/{trade_id}/fields", response_model=list[FieldOut])
async def get_trade_fields(trade_id: str):
    return [FieldOut.from_descriptor(d) for d in fields_for(trade_id)]


@router.get("/{trade_id}/checklists/{template_id}", response_model=list[ChecklistItem])
async def get_checklist(trade_id: str, template_id: str):
    template = lookup(trade_id).checklist_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Unknown checklist template '{template_id}'")
    return checklist_from_template(template)


@router.post("/{trade_id}/jobs/assemble")
async def assemble_job(trade_id: str, body: AssembleRequest):
    """Validate the job form for a trade and return the assembled payload."""
    submission = assemble(
        trade_id,
        body.model_dump(exclude={"trade_fields"}),
        body.trade_fields,
    )
    return submission.to_payload()
