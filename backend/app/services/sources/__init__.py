"""
Source adapters, one per entity kind.

Each adapter is a BaseSource subclass; the pipeline only sees the records
it returns and never the structure of the underlying document.

To add a new source:
1. Create a new file (e.g., new_source.py)
2. Subclass BaseSource with build_request, parse and fallback
3. Export it here and register it in SOURCES_BY_KIND
"""
from app.schemas.records import RecordKind

from .base import BaseSource
from .clinicaltrials import ClinicalTrialsSource, map_trial_status
from .scholar import ScholarPublicationSource
from .scholar_authors import ScholarResearcherSource

SOURCES_BY_KIND = {
    RecordKind.CLINICAL_TRIAL: ClinicalTrialsSource,
    RecordKind.PUBLICATION: ScholarPublicationSource,
    RecordKind.RESEARCHER: ScholarResearcherSource,
}

__all__ = [
    "BaseSource",
    "ClinicalTrialsSource",
    "ScholarPublicationSource",
    "ScholarResearcherSource",
    "SOURCES_BY_KIND",
    "map_trial_status",
]
