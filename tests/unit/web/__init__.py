"""Unit tests for TradeDesk web route modules."""
