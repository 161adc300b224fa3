"""
Schemas for dictionary terms.

This module defines the Pydantic models for definition records and the
search results built from them.
"""
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TermDefinition(BaseModel):
    """
    A generated explanation of a React term.

    The explanation fields come from the language model; the bookkeeping
    fields (id, createdAt, moderated, suggested) are set by the server and the
    local store.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    term: str
    purpose: str = Field("", description="A short sentence describing what it does")
    why: List[str] = Field(default_factory=list, description="3-5 reasons to use it")
    example: str = Field("", description="A real-world use case description")
    code: str = Field("", description="A concise copy-ready code snippet")
    summary: str = ""
    created_at: Optional[str] = Field(None, alias="createdAt")
    moderated: Optional[bool] = None
    suggested: Optional[bool] = None
    details: Optional[str] = Field(None, description="Free text sent with a user suggestion")

    @field_validator("why", mode="before")
    @classmethod
    def _coerce_why(cls, value: Union[str, List[str], None]) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return [str(value)]

    @field_validator("purpose", "example", "code", "summary", mode="before")
    @classmethod
    def _coerce_text(cls, value) -> str:
        return "" if value is None else str(value)

    def to_json(self) -> dict:
        """Serialize with wire names, dropping unset bookkeeping fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SearchResult(BaseModel):
    """One autocomplete hit. Lower scores are better matches."""
    item: TermDefinition
    refIndex: int
    score: Optional[float] = None
