"""
Spec document model and loading.

Handles the four document kinds (requirement documents, use cases, test
suites, roadmap), their cross-reference index, and the canonical
constitutions they are checked against.
"""

from specgate.specs.models import (
    DocumentSet,
    Requirement,
    RequirementDoc,
    RequirementRef,
    Roadmap,
    RoadmapRelease,
    RoadmapUseCase,
    TestSuite,
    Touchpoint,
    UseCase,
)
from specgate.specs.citations import CitationSyntaxError, parse_citation
from specgate.specs.loader import load_document_set
from specgate.specs.index import ReferenceIndex, Resolution
from specgate.specs.constitution import (
    ConstitutionError,
    ConstitutionSection,
    constitution_to_markdown,
    detect_constitution_drift,
    preview_constitution_file,
)

__all__ = [
    "DocumentSet",
    "Requirement",
    "RequirementDoc",
    "RequirementRef",
    "Roadmap",
    "RoadmapRelease",
    "RoadmapUseCase",
    "TestSuite",
    "Touchpoint",
    "UseCase",
    "CitationSyntaxError",
    "parse_citation",
    "load_document_set",
    "ReferenceIndex",
    "Resolution",
    "ConstitutionError",
    "ConstitutionSection",
    "constitution_to_markdown",
    "detect_constitution_drift",
    "preview_constitution_file",
]
