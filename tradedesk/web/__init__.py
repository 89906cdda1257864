"""TradeDesk web API."""
