"""
Renders publication metadata into the ordered declarations of the package
document's <metadata> block.

The emission order is fixed. Reading systems are sensitive to it and tests
compare rendered output directly, so new declarations go at a defined place
in render_metadata rather than being appended wherever convenient.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from epubsmith.models import Metadata

BOOK_ID = "BookId"
COVER_ID = "cover-image"
MODIFIED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class MetadataDeclaration:
    """A single child of <metadata>: 'dc:<name>' or 'meta'."""
    tag: str
    text: Optional[str] = None
    attrs: Dict[str, str] = field(default_factory=dict)


def _absent(value: Optional[str]) -> bool:
    return value is None or value == ""


class _Declarations:
    """Collects declarations, applying the omit-if-absent rule in one place."""

    def __init__(self) -> None:
        self.items: List[MetadataDeclaration] = []

    def add(self, tag: str, text: Optional[str] = None, **attrs: str) -> None:
        self.items.append(MetadataDeclaration(tag, text, dict(attrs)))

    def optional(self, tag: str, value: Optional[str], **attrs: str) -> None:
        if _absent(value):
            return
        self.add(tag, value, **attrs)

    def each(self, tag: str, values: Iterable[str], **attrs: str) -> None:
        for value in values:
            self.optional(tag, value, **attrs)


def most_complete_combination(combinations: Sequence[Sequence[str]]) -> List[str]:
    """
    Picks the access-mode-sufficient combination with the most members.
    Ties go to the first maximal combination encountered.
    """
    best: Sequence[str] = []
    for combination in combinations:
        if len(combination) > len(best):
            best = combination
    return list(best)


def format_modified(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(MODIFIED_FORMAT)


def render_metadata(metadata: Metadata, modified: Optional[datetime] = None) -> List[MetadataDeclaration]:
    d = _Declarations()

    # Required core
    d.add("dc:title", metadata.title)
    d.add("dc:language", metadata.language)
    d.add("dc:identifier", metadata.identifier, id=BOOK_ID)
    d.add("meta", format_modified(modified), property="dcterms:modified")

    # Optional Dublin Core
    d.optional("dc:creator", metadata.author)
    d.optional("dc:description", metadata.description)
    d.optional("dc:publisher", metadata.publisher)
    # dc:date is always written, even when the provider hands us ""
    d.add("dc:date", metadata.publication_date or "")
    d.each("dc:subject", metadata.subjects)

    # schema.org accessibility
    d.each("meta", metadata.access_modes, property="schema:accessMode")
    sufficient = most_complete_combination(metadata.access_mode_sufficient)
    if sufficient:
        d.add("meta", ",".join(sufficient), property="schema:accessModeSufficient")
    d.each("meta", metadata.accessibility_features, property="schema:accessibilityFeature")
    d.each("meta", metadata.accessibility_hazards, property="schema:accessibilityHazard")
    d.optional("meta", metadata.accessibility_summary, property="schema:accessibilitySummary")

    # Certification
    d.optional("meta", metadata.certified_by, property="a11y:certifiedBy")
    d.optional("meta", metadata.certifier_credential, property="a11y:certifierCredential")
    d.optional("meta", metadata.certifier_report, property="a11y:certifierReport")

    d.each("meta", metadata.conforms_to, property="dcterms:conformsTo")

    if metadata.has_cover:
        d.add("meta", name="cover", content=COVER_ID)

    return d.items
