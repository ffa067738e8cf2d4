"""TCM URI parsing, rendering, and publication rewriting.

A TCM URI has the textual form ``tcm:<publication>-<item>[-<kind>|-v<version>]``.

INVARIANT: URIs are immutable. Rewriting produces a new value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from tcmctl.domain.errors import FormatError

TCM_PREFIX = "tcm:"
PUBLICATION_KIND = 1

_VERSION_SEGMENT = re.compile(r"v([0-9]+)")
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class TcmUri:
    """Parsed TCM URI.

    Attributes:
        publication_id: Owning publication (0 for root-level items).
        item_id: Local item number within the publication.
        item_kind: Optional item type discriminator (1 = publication, 16 = component).
        version: Optional version number; ``None`` means the latest version.

    Item id 0 only appears on the null URI ``tcm:0-0-0`` and on
    ``tcm:0-0-1``, the reference to publication 0.

    Raises:
        FormatError: on construction with values that would not parse back.
    """

    publication_id: int
    item_id: int
    item_kind: int | None = None
    version: int | None = None

    def __post_init__(self) -> None:
        for label, value in (("publication id", self.publication_id), ("item id", self.item_id)):
            _check_non_negative(label, value)
        if self.item_kind is not None:
            _check_non_negative("item type", self.item_kind)
        if self.version is not None:
            _check_non_negative("version", self.version)
            if self.version < 1:
                msg = f"TCM URI version must be positive: {self.version}"
                raise FormatError(msg)

        if self.item_id == 0 and (
            self.publication_id != 0
            or self.version is not None
            or self.item_kind not in (None, 0, PUBLICATION_KIND)
        ):
            msg = f"TCM URI item id must be positive: {self}"
            raise FormatError(msg)

    @property
    def is_null(self) -> bool:
        """Whether this is the all-zero root URI (``tcm:0-0-0``)."""
        return self.publication_id == 0 and self.item_id == 0 and not self.item_kind

    @property
    def is_publication(self) -> bool:
        return self.publication_id == 0 and self.item_kind == PUBLICATION_KIND

    def with_publication(self, publication_id: int) -> TcmUri:
        """Return a copy owned by *publication_id*."""
        return replace(self, publication_id=publication_id)

    def with_version(self, version: int) -> TcmUri:
        """Return a copy rendered in versioned form (kind suffix dropped)."""
        return replace(self, item_kind=None, version=version)

    def __str__(self) -> str:
        base = f"{TCM_PREFIX}{self.publication_id}-{self.item_id}"
        if self.version is not None:
            return f"{base}-v{self.version}"
        if self.item_kind is not None:
            return f"{base}-{self.item_kind}"
        return base


def _check_non_negative(label: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"TCM URI {label} must be a non-negative integer: {value!r}"
        raise FormatError(msg)


def _parse_int(segment: str, label: str, text: str) -> int:
    if not _DIGITS.fullmatch(segment):
        msg = f"Invalid {label} {segment!r} in TCM URI: {text!r}"
        raise FormatError(msg)
    return int(segment)


def parse(text: str) -> TcmUri:
    """Parse *text* into a :class:`TcmUri`.

    Raises:
        FormatError: when the ``tcm:`` tag is missing, a segment is not a
            non-negative integer, the segment count is not 2 or 3, a version
            is not positive, or a zero item id appears outside ``tcm:0-0-0``
            and ``tcm:0-0-1``.
    """
    if not isinstance(text, str) or not text.startswith(TCM_PREFIX):
        msg = f"TCM URI must start with {TCM_PREFIX!r}: {text!r}"
        raise FormatError(msg)

    segments = text[len(TCM_PREFIX) :].split("-")
    if len(segments) not in (2, 3):
        msg = f"TCM URI must have two or three segments: {text!r}"
        raise FormatError(msg)

    publication_id = _parse_int(segments[0], "publication id", text)
    item_id = _parse_int(segments[1], "item id", text)
    item_kind: int | None = None
    version: int | None = None

    if len(segments) == 3:
        match = _VERSION_SEGMENT.fullmatch(segments[2])
        if match:
            version = int(match.group(1))
        else:
            item_kind = _parse_int(segments[2], "item type", text)

    try:
        return TcmUri(publication_id, item_id, item_kind, version)
    except FormatError as exc:
        msg = f"{exc} (in {text!r})"
        raise FormatError(msg) from exc


def is_tcm_uri(value: object) -> bool:
    """Cheap shape check used to tell identifiers apart from titles."""
    return isinstance(value, str) and value.startswith(TCM_PREFIX)


def normalize_publication(target: str | int | TcmUri) -> TcmUri:
    """Normalize a publication reference to ``tcm:0-<id>-1`` form.

    Accepts a parsed or textual publication URI, or a bare non-negative
    publication id given as an int or digit string.
    """
    if isinstance(target, TcmUri):
        uri = target
    elif isinstance(target, bool):
        msg = f"Invalid publication reference: {target!r}"
        raise FormatError(msg)
    elif isinstance(target, int):
        if target < 0:
            msg = f"Publication id must be non-negative: {target}"
            raise FormatError(msg)
        return TcmUri(0, target, PUBLICATION_KIND)
    elif isinstance(target, str) and _DIGITS.fullmatch(target.strip()):
        return TcmUri(0, int(target.strip()), PUBLICATION_KIND)
    else:
        uri = parse(target)

    if not uri.is_publication:
        msg = f"Not a publication URI: {uri}"
        raise FormatError(msg)
    return uri


def normalize_version(version: int | str | None) -> int | None:
    if version is None or version == "":
        return None
    if isinstance(version, str):
        version = _parse_int(version.strip(), "version", version)
    if version < 1:
        msg = f"Version must be positive: {version}"
        raise FormatError(msg)
    return version


def rewrite_publication(
    identifier: str | TcmUri,
    target_publication: str | int | TcmUri,
    version: int | str | None = None,
) -> str:
    """Translate *identifier* into the namespace of *target_publication*.

    Without a version the original third segment is kept as-is (kind,
    version, or none). With a version the result always uses the
    ``v<version>`` suffix, even when the source carried an item kind.

    Raises:
        FormatError: for malformed input, or when *identifier* is the null
            URI, which belongs to no publication.
    """
    source = identifier if isinstance(identifier, TcmUri) else parse(identifier)
    if source.is_null:
        msg = f"The null URI {source} cannot be translated to another publication"
        raise FormatError(msg)
    publication = normalize_publication(target_publication)
    result = source.with_publication(publication.item_id)

    requested = normalize_version(version)
    if requested is not None:
        result = result.with_version(requested)
    return str(result)
