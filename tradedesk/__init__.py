"""TradeDesk - trade-services business management core."""

__version__ = "0.1.0"
