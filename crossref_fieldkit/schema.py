"""Known structure of a Crossref metadata record, keyed by dotted field path."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class FieldType(Enum):
    """Kind of JSON node found at a schema path."""

    ARRAY = "array"
    OBJECT = "object"
    VALUE = "value"


_A = FieldType.ARRAY
_O = FieldType.OBJECT
_V = FieldType.VALUE

SCHEMA: Mapping[str, FieldType] = MappingProxyType(
    {
        "DOI": _V,
        "ISSN": _A,
        "URL": _V,
        "alternative-id": _A,
        "author": _A,
        "author.affiliation": _A,
        "author.affiliation.name": _V,
        "author.affiliation.place": _A,
        "author.affiliation.id": _A,
        "author.affiliation.id.asserted-by": _V,
        "author.affiliation.id.id": _V,
        "author.affiliation.id.id-type": _V,
        "author.affiliation.department": _A,
        "author.affiliation.acronym": _A,
        "author.family": _V,
        "author.given": _V,
        "author.sequence": _V,
        "author.name": _V,
        "author.suffix": _V,
        "author.ORCID": _V,
        "author.authenticated-orcid": _V,
        "container-title": _A,
        "content-domain": _O,
        "content-domain.crossmark-restriction": _V,
        "content-domain.domain": _A,
        "created": _O,
        "created.date-parts": _A,
        "created.date-time": _V,
        "created.timestamp": _V,
        "deposited": _O,
        "deposited.date-parts": _A,
        "deposited.date-time": _V,
        "deposited.timestamp": _V,
        "indexed": _O,
        "indexed.date-parts": _A,
        "indexed.date-time": _V,
        "indexed.timestamp": _V,
        "indexed.version": _V,
        "is-referenced-by-count": _V,
        "issn-type": _A,
        "issn-type.type": _V,
        "issn-type.value": _V,
        "issue": _V,
        "issued": _O,
        "issued.date-parts": _A,
        "journal-issue": _O,
        "journal-issue.issue": _V,
        "journal-issue.published-print": _O,
        "journal-issue.published-print.date-parts": _A,
        "journal-issue.published-online": _O,
        "journal-issue.published-online.date-parts": _A,
        "language": _V,
        "license": _A,
        "license.URL": _V,
        "license.content-version": _V,
        "license.delay-in-days": _V,
        "license.start": _O,
        "license.start.date-parts": _A,
        "license.start.date-time": _V,
        "license.start.timestamp": _V,
        "link": _A,
        "link.URL": _V,
        "link.content-type": _V,
        "link.content-version": _V,
        "link.intended-application": _V,
        "member": _V,
        "page": _V,
        "prefix": _V,
        "published": _O,
        "published.date-parts": _A,
        "published-print": _O,
        "published-print.date-parts": _A,
        "publisher": _V,
        "reference": _A,
        "reference.article-title": _V,
        "reference.author": _V,
        "reference.first-page": _V,
        "reference.journal-title": _V,
        "reference.key": _V,
        "reference.volume": _V,
        "reference.year": _V,
        "reference.DOI": _V,
        "reference.doi-asserted-by": _V,
        "reference.unstructured": _V,
        "reference.issue": _V,
        "reference.series-title": _V,
        "reference.volume-title": _V,
        "reference.edition": _V,
        "reference.ISSN": _V,
        "reference.issn-type": _V,
        "reference.ISBN": _V,
        "reference.isbn-type": _V,
        "reference.component": _V,
        "reference.standards-body": _V,
        "reference.standard-designator": _V,
        "reference-count": _V,
        "references-count": _V,
        "resource": _O,
        "resource.primary": _O,
        "resource.primary.URL": _V,
        "resource.secondary": _A,
        "resource.secondary.URL": _V,
        "resource.secondary.label": _V,
        "score": _V,
        "short-container-title": _A,
        "source": _V,
        "title": _A,
        "volume": _V,
        "special_numbering": _V,
        "published-online": _O,
        "published-online.date-parts": _A,
        "abstract": _V,
        "article-number": _V,
        "archive": _A,
        "assertion": _A,
        "assertion.group": _O,
        "assertion.group.label": _V,
        "assertion.group.name": _V,
        "assertion.label": _V,
        "assertion.name": _V,
        "assertion.order": _V,
        "assertion.value": _V,
        "assertion.explanation": _O,
        "assertion.explanation.URL": _V,
        "assertion.URL": _V,
        "update-policy": _V,
        "subtitle": _A,
        "updated-by": _A,
        "updated-by.DOI": _V,
        "updated-by.label": _V,
        "updated-by.source": _V,
        "updated-by.type": _V,
        "updated-by.updated": _O,
        "updated-by.updated.date-parts": _A,
        "updated-by.updated.date-time": _V,
        "updated-by.updated.timestamp": _V,
        "updated-by.record-id": _V,
        "relation": _O,
        "relation.*": _A,
        "relation.*.asserted-by": _V,
        "relation.*.id": _V,
        "relation.*.id-type": _V,
        "funder": _A,
        "funder.DOI": _V,
        "funder.doi-asserted-by": _V,
        "funder.id": _A,
        "funder.id.asserted-by": _V,
        "funder.id.id": _V,
        "funder.id.id-type": _V,
        "funder.name": _V,
        "funder.award": _A,
        "update-to": _A,
        "update-to.DOI": _V,
        "update-to.label": _V,
        "update-to.record-id": _V,
        "update-to.source": _V,
        "update-to.type": _V,
        "update-to.updated": _O,
        "update-to.updated.date-parts": _A,
        "update-to.updated.date-time": _V,
        "update-to.updated.timestamp": _V,
        "published-other": _O,
        "published-other.date-parts": _A,
        "editor": _A,
        "editor.affiliation": _A,
        "editor.affiliation.name": _V,
        "editor.affiliation.id": _A,
        "editor.affiliation.id.asserted-by": _V,
        "editor.affiliation.id.id": _V,
        "editor.affiliation.id.id-type": _V,
        "editor.affiliation.place": _A,
        "editor.affiliation.acronym": _A,
        "editor.affiliation.department": _A,
        "editor.family": _V,
        "editor.given": _V,
        "editor.sequence": _V,
        "editor.ORCID": _V,
        "editor.authenticated-orcid": _V,
        "editor.name": _V,
        "editor.suffix": _V,
        "aliases": _A,
        "original-title": _A,
        "ISBN": _A,
        "isbn-type": _A,
        "isbn-type.type": _V,
        "isbn-type.value": _V,
        "publisher-location": _V,
        "description": _V,
        "event": _O,
        "event.location": _V,
        "event.name": _V,
        "event.end": _O,
        "event.end.date-parts": _A,
        "event.start": _O,
        "event.start.date-parts": _A,
        "event.acronym": _V,
        "event.sponsor": _A,
        "event.number": _V,
        "event.theme": _V,
        "accepted": _O,
        "accepted.date-parts": _A,
        "short-title": _A,
        "review": _O,
        "review.competing-interest-statement": _V,
        "review.recommendation": _V,
        "review.revision-round": _V,
        "review.stage": _V,
        "review.type": _V,
        "review.language": _V,
        "review.running-number": _V,
        "group-title": _V,
        "institution": _A,
        "institution.name": _V,
        "institution.place": _A,
        "institution.acronym": _A,
        "institution.department": _A,
        "institution.id": _A,
        "institution.id.asserted-by": _V,
        "institution.id.id": _V,
        "institution.id.id-type": _V,
        "posted": _O,
        "posted.date-parts": _A,
        "subtype": _V,
        "approved": _O,
        "approved.date-parts": _A,
        "standards-body": _O,
        "standards-body.acronym": _V,
        "standards-body.name": _V,
        "content-created": _O,
        "content-created.date-parts": _A,
        "edition-number": _V,
        "degree": _A,
        "issue-title": _A,
        "translator": _A,
        "translator.affiliation": _A,
        "translator.affiliation.name": _V,
        "translator.affiliation.id": _A,
        "translator.affiliation.id.asserted-by": _V,
        "translator.affiliation.id.id": _V,
        "translator.affiliation.id.id-type": _V,
        "translator.affiliation.place": _A,
        "translator.family": _V,
        "translator.given": _V,
        "translator.sequence": _V,
        "translator.name": _V,
        "translator.ORCID": _V,
        "translator.authenticated-orcid": _V,
        "translator.suffix": _V,
        "clinical-trial-number": _A,
        "clinical-trial-number.clinical-trial-number": _V,
        "clinical-trial-number.registry": _V,
        "clinical-trial-number.type": _V,
        "award": _V,
        "award-start": _O,
        "award-start.date-parts": _A,
        "project": _A,
        "project.award-end": _O,
        "project.award-end.date-parts": _A,
        "project.award-start": _O,
        "project.award-start.date-parts": _A,
        "project.funding": _A,
        "project.funding.funder": _O,
        "project.funding.funder.id": _A,
        "project.funding.funder.id.asserted-by": _V,
        "project.funding.funder.id.id": _V,
        "project.funding.funder.id.id-type": _V,
        "project.funding.funder.name": _V,
        "project.funding.type": _V,
        "project.funding.scheme": _V,
        "project.funding.award-amount": _O,
        "project.funding.award-amount.amount": _V,
        "project.funding.award-amount.currency": _V,
        "project.funding.award-amount.percentage": _V,
        "project.investigator": _A,
        "project.investigator.affiliation": _A,
        "project.investigator.affiliation.country": _V,
        "project.investigator.affiliation.name": _V,
        "project.investigator.affiliation.id": _A,
        "project.investigator.affiliation.id.asserted-by": _V,
        "project.investigator.affiliation.id.id": _V,
        "project.investigator.affiliation.id.id-type": _V,
        "project.investigator.family": _V,
        "project.investigator.given": _V,
        "project.investigator.ORCID": _V,
        "project.investigator.authenticated-orcid": _V,
        "project.investigator.alternate-name": _A,
        "project.investigator.role-start": _O,
        "project.investigator.role-start.date-parts": _A,
        "project.investigator.role-end": _O,
        "project.investigator.role-end.date-parts": _A,
        "project.lead-investigator": _A,
        "project.lead-investigator.affiliation": _A,
        "project.lead-investigator.affiliation.country": _V,
        "project.lead-investigator.affiliation.name": _V,
        "project.lead-investigator.affiliation.id": _A,
        "project.lead-investigator.affiliation.id.asserted-by": _V,
        "project.lead-investigator.affiliation.id.id": _V,
        "project.lead-investigator.affiliation.id.id-type": _V,
        "project.lead-investigator.family": _V,
        "project.lead-investigator.given": _V,
        "project.lead-investigator.ORCID": _V,
        "project.lead-investigator.authenticated-orcid": _V,
        "project.lead-investigator.alternate-name": _A,
        "project.lead-investigator.role-start": _O,
        "project.lead-investigator.role-start.date-parts": _A,
        "project.lead-investigator.role-end": _O,
        "project.lead-investigator.role-end.date-parts": _A,
        "project.project-title": _A,
        "project.project-title.title": _V,
        "project.project-title.language": _V,
        "project.project-description": _A,
        "project.project-description.description": _V,
        "project.project-description.language": _V,
        "project.award-amount": _O,
        "project.award-amount.amount": _V,
        "project.award-amount.currency": _V,
        "project.co-lead-investigator": _A,
        "project.co-lead-investigator.ORCID": _V,
        "project.co-lead-investigator.affiliation": _A,
        "project.co-lead-investigator.affiliation.country": _V,
        "project.co-lead-investigator.affiliation.name": _V,
        "project.co-lead-investigator.affiliation.id": _A,
        "project.co-lead-investigator.affiliation.id.asserted-by": _V,
        "project.co-lead-investigator.affiliation.id.id": _V,
        "project.co-lead-investigator.affiliation.id.id-type": _V,
        "project.co-lead-investigator.authenticated-orcid": _V,
        "project.co-lead-investigator.family": _V,
        "project.co-lead-investigator.given": _V,
        "project.co-lead-investigator.role-end": _O,
        "project.co-lead-investigator.role-end.date-parts": _A,
        "project.co-lead-investigator.role-start": _O,
        "project.co-lead-investigator.role-start.date-parts": _A,
        "project.award-planned-end": _O,
        "project.award-planned-end.date-parts": _A,
        "proceedings-subject": _V,
        "chair": _A,
        "chair.affiliation": _A,
        "chair.affiliation.name": _V,
        "chair.affiliation.id": _A,
        "chair.affiliation.id.asserted-by": _V,
        "chair.affiliation.id.id": _V,
        "chair.affiliation.id.id-type": _V,
        "chair.affiliation.department": _A,
        "chair.affiliation.acronym": _A,
        "chair.affiliation.place": _A,
        "chair.family": _V,
        "chair.given": _V,
        "chair.sequence": _V,
        "chair.ORCID": _V,
        "chair.authenticated-orcid": _V,
        "chair.name": _V,
        "chair.suffix": _V,
        "content-updated": _O,
        "content-updated.date-parts": _A,
        "part-number": _V,
        "type": _V,
        "year": _V,
    }
)


def field_type(path: str) -> FieldType | None:
    """Return the schema type of a dotted field path, or None if it is unknown."""
    return SCHEMA.get(path)