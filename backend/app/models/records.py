"""
Record Tables

SQLAlchemy mappings for the shared store. Each table carries a unique
constraint on the natural key of its entity kind; the upsert uses it as the
conflict target.
"""
import uuid

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from app.core.db import Base
from app.schemas.records import RecordKind


def _new_id() -> str:
    return str(uuid.uuid4())


class ClinicalTrial(Base):
    __tablename__ = "clinical_trials"

    id = Column(String(36), primary_key=True, default=_new_id)
    nct_id = Column(String(32), nullable=False, unique=True)
    title = Column(Text, nullable=False)
    status = Column(String(32))
    phase = Column(String(64))
    condition = Column(JSON, default=list)
    intervention = Column(JSON, default=list)
    eligibility = Column(Text)
    location = Column(Text)
    sponsor = Column(Text)
    contact_email = Column(String(255))
    link = Column(Text)
    ai_summary = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class Publication(Base):
    __tablename__ = "publications"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(Text, nullable=False, unique=True)
    authors = Column(JSON, default=list)
    journal = Column(Text)
    year = Column(Integer)
    link = Column(Text)
    abstract = Column(Text)
    ai_summary = Column(Text)
    disease_keywords = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class Expert(Base):
    __tablename__ = "experts"
    __table_args__ = (UniqueConstraint("name", "affiliation", name="uq_experts_name_affiliation"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    affiliation = Column(Text, nullable=False, default="")
    profile_url = Column(Text)
    specialties = Column(JSON, default=list)
    location = Column(Text)
    email = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


TABLES = {
    RecordKind.CLINICAL_TRIAL: ClinicalTrial,
    RecordKind.PUBLICATION: Publication,
    RecordKind.RESEARCHER: Expert,
}
