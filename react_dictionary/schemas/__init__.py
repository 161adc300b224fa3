"""Pydantic schemas for React Dictionary."""
