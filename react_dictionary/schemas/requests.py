"""
API request and response schemas for React Dictionary.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SuggestionRequest(BaseModel):
    """Request body for the /api/suggest endpoint."""
    term: Optional[str] = None
    details: Optional[str] = Field(None, description="Why the term should be added")


class SuggestionResponse(BaseModel):
    """Response model for the /api/suggest endpoint."""
    success: bool
    message: str


class BookmarkCreate(BaseModel):
    term: str


class BookmarkItem(BaseModel):
    """A user-local pointer to a saved term."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    term: str
    added_at: str = Field(..., alias="addedAt")


class RecentSearchCreate(BaseModel):
    term: str
