"""
Search Schemas

Request and response bodies for the ingest and query-assist endpoints.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class IngestQuery(BaseModel):
    """Query terms for one ingest cycle."""
    disease: str = Field(min_length=1, description="Disease or condition to search for")
    keyword: Optional[str] = Field(default=None, description="Optional free-text keyword")
    location: Optional[str] = Field(default=None, description="Optional location filter")

    @field_validator("disease")
    @classmethod
    def _strip_disease(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("disease must not be blank")
        return value

    @field_validator("keyword", "location")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def terms(self) -> List[str]:
        """Non-empty query terms in disease, keyword, location order."""
        return [t for t in (self.disease, self.keyword, self.location) if t]


class ExtractDiseaseRequest(BaseModel):
    text: str = Field(min_length=1, description="Free-text description from the user")


class KeywordsRequest(BaseModel):
    disease: str = Field(min_length=1)
    context: Optional[str] = None


class EnhanceQueryRequest(BaseModel):
    query: str = Field(min_length=1)
    disease: str = Field(min_length=1)
