"""Funnel, market sizing and headline indicators."""
