"""Health check API routes."""

from fastapi import APIRouter, status

from tradedesk import __version__
from tradedesk.config import get_config
from tradedesk.trades.registry import all_trades

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Check application health.

    Reports the loaded trade registry; the backend is not contacted.
    """
    config = get_config()
    return {
        "status": "ok",
        "version": __version__,
        "environment": config.environment,
        "trades": len(all_trades()),
    }
