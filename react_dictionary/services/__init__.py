"""Service layer for React Dictionary."""
