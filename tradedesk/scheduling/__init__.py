"""Schedule calendar views."""
