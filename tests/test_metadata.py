from datetime import datetime, timedelta, timezone

from epubsmith.epub.metadata import format_modified, most_complete_combination, render_metadata
from epubsmith.models import Metadata

FIXED = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)


def _minimal(**kw) -> Metadata:
    return Metadata(title="T", language="en", identifier="id1", **kw)


def _tags(decls):
    return [d.tag if d.tag != "meta" else d.attrs.get("property", "meta:" + d.attrs.get("name", "")) for d in decls]


def test_minimal_metadata_emits_only_required_declarations():
    decls = render_metadata(_minimal(), modified=FIXED)
    assert _tags(decls) == ["dc:title", "dc:language", "dc:identifier", "dcterms:modified", "dc:date"]
    assert decls[2].attrs == {"id": "BookId"}
    assert decls[3].text == "2024-05-06T07:08:09Z"
    # Publication date passes through even when empty
    assert decls[4].text == ""


def test_absent_and_empty_optionals_are_omitted():
    decls = render_metadata(_minimal(author=None, description="", publisher=None, accessibility_summary=""), modified=FIXED)
    tags = _tags(decls)
    for omitted in ("dc:creator", "dc:description", "dc:publisher", "schema:accessibilitySummary"):
        assert omitted not in tags


def test_full_metadata_emission_order():
    md = _minimal(
        author="Ana",
        description="Desc",
        publisher="Pub",
        publication_date="2024-01-01",
        subjects=["Fiction", "Adventure"],
        access_modes=["textual", "visual"],
        access_mode_sufficient=[["textual"], ["textual", "visual"]],
        accessibility_features=["structuralNavigation", "alternativeText"],
        accessibility_hazards=["none"],
        accessibility_summary="Summary",
        certified_by="Cert Org",
        certifier_credential="Cred",
        certifier_report="https://example.org/report",
        conforms_to=["http://www.idpf.org/epub/a11y/accessibility-20170105.html#wcag-aa"],
        cover="cover.png",
    )
    decls = render_metadata(md, modified=FIXED)
    assert _tags(decls) == [
        "dc:title", "dc:language", "dc:identifier", "dcterms:modified",
        "dc:creator", "dc:description", "dc:publisher", "dc:date",
        "dc:subject", "dc:subject",
        "schema:accessMode", "schema:accessMode",
        "schema:accessModeSufficient",
        "schema:accessibilityFeature", "schema:accessibilityFeature",
        "schema:accessibilityHazard",
        "schema:accessibilitySummary",
        "a11y:certifiedBy", "a11y:certifierCredential", "a11y:certifierReport",
        "dcterms:conformsTo",
        "meta:cover",
    ]
    assert [d.text for d in decls if d.tag == "dc:subject"] == ["Fiction", "Adventure"]
    assert decls[-1].attrs == {"name": "cover", "content": "cover-image"}
    assert decls[-1].text is None


def test_access_mode_sufficient_picks_largest_combination():
    decls = render_metadata(_minimal(access_mode_sufficient=[["textual"], ["textual", "visual"]]), modified=FIXED)
    sufficient = [d for d in decls if d.attrs.get("property") == "schema:accessModeSufficient"]
    assert len(sufficient) == 1
    assert sufficient[0].text == "textual,visual"


def test_most_complete_ties_resolve_to_first():
    assert most_complete_combination([["auditory"], ["textual", "visual"], ["visual", "auditory"]]) == ["textual", "visual"]
    assert most_complete_combination([]) == []
    assert most_complete_combination([[]]) == []


def test_no_sufficient_declaration_without_combinations():
    decls = render_metadata(_minimal(access_mode_sufficient=[[]]), modified=FIXED)
    assert all(d.attrs.get("property") != "schema:accessModeSufficient" for d in decls)


def test_modified_is_normalized_to_utc():
    local = datetime(2024, 5, 6, 9, 8, 9, tzinfo=timezone(timedelta(hours=2)))
    assert format_modified(local) == "2024-05-06T07:08:09Z"
    assert len(format_modified()) == len("2024-05-06T07:08:09Z")
