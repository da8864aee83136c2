"""
Consistency analyzer.

Walks the reference graph of a loaded document set and reports two kinds
of findings, kept strictly apart:

- consistency issues: graph-shape problems (dangling or missing
  references). These block planning.
- defects: malformed or drifted documents (schema errors, constitution
  drift, unparsable citations). These block authoring.

Pure function of its input: no I/O, no shared state, stable output order.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from specgate.specs.index import ReferenceIndex, Resolution
from specgate.specs.models import DocumentSet

logger = logging.getLogger(__name__)


# Detail prefixes, in merge order
ISSUE_PREFIXES = (
    ("orphaned_requirement_docs", "orphaned PRD: "),
    ("releases_without_test_suites", "release without test suite: "),
    ("orphaned_test_suites", "orphaned test suite: "),
    ("broken_touchpoints", "broken touchpoint: "),
    ("use_cases_not_in_roadmap", "use case not in roadmap: "),
    ("broken_citations", "broken citation: "),
)

DEFECT_PREFIXES = (
    ("schema_errors", "schema error: "),
    ("constitution_drift", "constitution drift: "),
    ("unparsable_citations", "unparsable citation: "),
)


@dataclass
class ConsistencyResult:
    """Output of one analysis run. Each category is an ordered list."""
    orphaned_requirement_docs: list[str] = field(default_factory=list)
    releases_without_test_suites: list[str] = field(default_factory=list)
    orphaned_test_suites: list[str] = field(default_factory=list)
    broken_touchpoints: list[str] = field(default_factory=list)   # "<uc> -> <doc>"
    use_cases_not_in_roadmap: list[str] = field(default_factory=list)
    broken_citations: list[str] = field(default_factory=list)     # "<uc> -> <doc>:<req>"

    schema_errors: list[str] = field(default_factory=list)
    constitution_drift: list[str] = field(default_factory=list)
    unparsable_citations: list[str] = field(default_factory=list)

    def consistency_details(self) -> list[str]:
        """All consistency issues merged in fixed category order. Excludes defects."""
        return _collect(self, ISSUE_PREFIXES)

    def defects(self) -> list[str]:
        """Schema errors, then drift, then unparsable citations."""
        return _collect(self, DEFECT_PREFIXES)

    def consistency_errors(self) -> int:
        return sum(len(getattr(self, name)) for name, _ in ISSUE_PREFIXES)

    def has_defects(self) -> bool:
        return any(getattr(self, name) for name, _ in DEFECT_PREFIXES)


def _collect(result: ConsistencyResult, prefixes) -> list[str]:
    out = []
    for name, prefix in prefixes:
        out.extend(prefix + entry for entry in getattr(result, name))
    return out


def _unique(items: Iterable[str]) -> list[str]:
    """Drop repeats, keeping first occurrence order."""
    seen = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def check_touchpoints(index: ReferenceIndex) -> tuple[list[str], list[str], set[str]]:
    """Resolve every touchpoint reference.

    Returns (broken_touchpoints, broken_citations, cited_doc_ids).
    A document counts as cited once any reference names it, even when
    the requirement id inside it does not resolve.
    """
    broken_touchpoints = []
    broken_citations = []
    cited: set[str] = set()

    for uc_id in index.use_case_ids:
        uc = index.use_cases[uc_id]
        for tp in uc.touchpoints:
            for ref in tp.refs:
                resolution = index.resolve(ref)
                if resolution is Resolution.MISSING_DOCUMENT:
                    broken_touchpoints.append(f"{uc_id} -> {ref.document_id}")
                    continue
                cited.add(ref.document_id)
                if resolution is Resolution.MISSING_REQUIREMENT:
                    broken_citations.append(f"{uc_id} -> {ref}")

    return _unique(broken_touchpoints), _unique(broken_citations), cited


def find_releases_without_test_suites(docs: DocumentSet, index: ReferenceIndex) -> list[str]:
    """Roadmap releases that plan use cases but have no test suite, in roadmap order."""
    if docs.roadmap is None:
        return []
    missing = []
    for release in docs.roadmap.releases:
        if not release.use_cases:
            continue
        if not index.has_suite_for_release(release.version):
            missing.append(release.version)
    return _unique(missing)


def find_orphaned_test_suites(index: ReferenceIndex) -> list[str]:
    """Suites tracing at least one use case id that doesn't exist."""
    orphaned = []
    for suite_id in index.test_suite_ids:
        suite = index.test_suites[suite_id]
        dangling = [t for t in suite.traces if index.use_case(t) is None]
        if dangling:
            logger.debug(f"Test suite {suite_id} traces unknown use cases: {dangling}")
            orphaned.append(suite_id)
    return orphaned


def analyze_consistency(
    docs: DocumentSet,
    index: Optional[ReferenceIndex] = None,
    drift: Iterable[str] = (),
) -> ConsistencyResult:
    """Apply the integrity rules to a document set.

    Args:
        docs: Output of the loader
        index: Prebuilt index (built from docs if omitted)
        drift: Constitution drift entries found by the caller

    A missing roadmap is treated as an empty one.
    """
    if index is None:
        index = ReferenceIndex.build(docs)

    broken_touchpoints, broken_citations, cited = check_touchpoints(index)

    result = ConsistencyResult(
        orphaned_requirement_docs=[d for d in index.requirement_doc_ids if d not in cited],
        releases_without_test_suites=find_releases_without_test_suites(docs, index),
        orphaned_test_suites=find_orphaned_test_suites(index),
        broken_touchpoints=broken_touchpoints,
        use_cases_not_in_roadmap=[
            uc_id for uc_id in index.use_case_ids
            if uc_id not in index.roadmap_use_case_ids
        ],
        broken_citations=broken_citations,
        schema_errors=_unique(docs.schema_errors),
        constitution_drift=_unique(drift),
        unparsable_citations=_unique(docs.citation_errors),
    )

    logger.debug(
        f"Consistency analysis: {result.consistency_errors()} issues, "
        f"{len(result.defects())} defects"
    )
    return result
