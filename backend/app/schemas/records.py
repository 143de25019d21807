"""
Record Schemas

Normalized records produced by the source adapters. Each kind declares the
columns that form its natural key; the store uses them as the conflict
target of its upsert.
"""
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, Field


class RecordKind(str, Enum):
    """Entity kinds handled by the ingestion pipeline."""
    CLINICAL_TRIAL = "clinical_trial"
    PUBLICATION = "publication"
    RESEARCHER = "researcher"


class TrialStatus(str, Enum):
    """Closed recruitment status vocabulary for stored trials."""
    RECRUITING = "recruiting"
    ACTIVE = "active"
    COMPLETED = "completed"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"
    WITHDRAWN = "withdrawn"


class NormalizedRecord(BaseModel):
    """Shared skeleton of every normalized record."""
    kind: ClassVar[RecordKind]
    natural_key: ClassVar[Tuple[str, ...]]

    def key(self) -> Tuple:
        """Values of the natural key columns, in declaration order."""
        return tuple(getattr(self, column) for column in self.natural_key)

    def describe(self) -> str:
        """Short human-readable identity used in log lines."""
        return " / ".join(str(value) for value in self.key())

    def to_row(self) -> dict:
        """Column values for the store."""
        return self.model_dump(mode="json")


class ClinicalTrialRecord(NormalizedRecord):
    """A trial from the registry, keyed by its NCT identifier."""
    kind: ClassVar[RecordKind] = RecordKind.CLINICAL_TRIAL
    natural_key: ClassVar[Tuple[str, ...]] = ("nct_id",)

    nct_id: str
    title: str
    status: TrialStatus = TrialStatus.RECRUITING
    phase: Optional[str] = None
    condition: List[str] = Field(default_factory=list)
    intervention: List[str] = Field(default_factory=list)
    eligibility: Optional[str] = None
    location: Optional[str] = None
    sponsor: Optional[str] = None
    contact_email: Optional[str] = None
    link: Optional[str] = None
    ai_summary: Optional[str] = None


class PublicationRecord(NormalizedRecord):
    """A scholarly publication, keyed by its title."""
    kind: ClassVar[RecordKind] = RecordKind.PUBLICATION
    natural_key: ClassVar[Tuple[str, ...]] = ("title",)

    title: str
    authors: List[str] = Field(default_factory=list)
    journal: Optional[str] = None
    year: Optional[int] = None
    link: Optional[str] = None
    abstract: Optional[str] = None
    disease_keywords: List[str] = Field(default_factory=list)
    ai_summary: Optional[str] = None


class ResearcherRecord(NormalizedRecord):
    """A researcher profile, keyed by name plus affiliation."""
    kind: ClassVar[RecordKind] = RecordKind.RESEARCHER
    natural_key: ClassVar[Tuple[str, ...]] = ("name", "affiliation")

    name: str
    # Empty rather than missing so the composite key still conflicts
    affiliation: str = ""
    profile_url: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    email: Optional[str] = None
