"""Finances app package: the single payment attached to each booking."""
