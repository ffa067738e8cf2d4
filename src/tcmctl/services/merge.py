"""Publication field merging onto a staging record.

Applies a sparse :class:`PublicationFields` onto a :class:`PublicationRecord`.
Lookup failures are returned as issues and never abort the merge, so a
caller may end up with some parents attached and others reported.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable

from tcmctl.domain.errors import NotFoundError
from tcmctl.domain.records import ItemRecord, LinkRef, PublicationFields, PublicationRecord
from tcmctl.domain.uri import is_tcm_uri
from tcmctl.services.result import ServiceError

logger = logging.getLogger(__name__)

ListPublications = Callable[[], Iterable[ItemRecord]]
ReadItem = Callable[[str], ItemRecord | None]


def apply_fields(
    record: PublicationRecord,
    fields: PublicationFields,
    *,
    list_publications: ListPublications,
    read_item: ReadItem,
) -> list[ServiceError]:
    """Apply *fields* onto *record* in place and return the non-fatal issues.

    Args:
        record: Staging record owned by the calling operation.
        fields: Sparse updates; ``None``/empty values are skipped.
        list_publications: Returns every publication. Called at most once,
            and only when a parent is given by title.
        read_item: Returns the item for an id, or None when it does not exist.
    """
    issues: list[ServiceError] = []

    for name in PublicationFields.SIMPLE_FIELDS:
        value = getattr(fields, name)
        if value:
            setattr(record, name, value)

    if fields.key:
        record.key = fields.key
    elif fields.title:
        record.key = fields.title

    if fields.parents is not None:
        record.parents = _resolve_parents(fields.parents, list_publications, issues)

    if fields.business_process_type:
        bpt = read_item(fields.business_process_type)
        if bpt is None:
            err = NotFoundError(f"Business process type {fields.business_process_type} not found")
            issues.append(
                ServiceError.from_exception(err, field="business_process_type")
            )
        else:
            record.business_process_type = LinkRef(id=bpt.id, title=bpt.title)

    return issues


def _resolve_parents(
    entries: list[str],
    list_publications: ListPublications,
    issues: list[ServiceError],
) -> list[LinkRef]:
    # Memoized for this merge only.
    @functools.cache
    def publications() -> tuple[ItemRecord, ...]:
        return tuple(list_publications())

    resolved: list[LinkRef] = []
    for entry in entries:
        if is_tcm_uri(entry):
            resolved.append(LinkRef(id=entry))
            continue
        match = next((p for p in publications() if p.title == entry), None)
        if match is None:
            logger.debug("Parent publication %r not found", entry)
            err = NotFoundError(f"Parent publication {entry!r} not found")
            issues.append(ServiceError.from_exception(err, field="parents", entry=entry))
            continue
        resolved.append(LinkRef(id=match.id, title=match.title))
    return resolved
