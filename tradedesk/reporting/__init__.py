"""Dashboard and report aggregates."""
