"""Derived status classifiers."""
