"""Persistence backend integration."""
