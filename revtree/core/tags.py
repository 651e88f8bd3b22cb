"""Semantic version tag selection.

Picks the baseline tag a working tree is compared against by default.
Tags that are not semantic versions are expected (release branches, date
tags, ...) and are skipped without error; only a repository with no usable
tag at all is an error.
"""

import logging
from collections.abc import Iterable

from semver import Version

from revtree.domain.config import TagSelection
from revtree.domain.exceptions import NoTagsError, NoValidSemverTagError

logger = logging.getLogger(__name__)


def parse_semver(tag: str) -> Version | None:
    """Parse a tag as a semantic version.

    One leading "v" or "V" is accepted, and missing minor/patch components
    default to zero ("v1.2" is 1.2.0).

    Args:
        tag: Raw tag name.

    Returns:
        Parsed version, or None if the tag is not a semantic version.
    """
    text = tag[1:] if tag[:1] in ("v", "V") else tag
    try:
        return Version.parse(text, optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


def _parsed(tags: Iterable[str]) -> list[tuple[Version, str]]:
    parsed = []
    for tag in tags:
        version = parse_semver(tag)
        if version is None:
            logger.debug("Ignoring tag %r: not a semantic version", tag)
            continue
        parsed.append((version, tag))
    return parsed


def sort_semver_tags(tags: Iterable[str]) -> list[str]:
    """Order the semver tags by precedence, lowest first.

    Non-semver tags are dropped. Tags of equal precedence keep their input
    order.
    """
    return [tag for _, tag in sorted(_parsed(tags), key=lambda item: item[0])]


def select_comparison_tag(tags: Iterable[str], select: TagSelection = "latest") -> str:
    """Pick the baseline tag from a repository's tags.

    "latest" returns the tag with the highest semver precedence, which is
    the release a working tree is normally compared against. "earliest"
    returns the lowest one instead. Among tags of equal precedence (such as
    "v1.0.0" and "1.0.0", or builds differing only in metadata) the first
    one in input order wins.

    Args:
        tags: Raw tag names.
        select: "latest" or "earliest".

    Returns:
        The chosen tag, exactly as given (not normalized), so it can be
        checked out.

    Raises:
        NoTagsError: If tags is empty.
        NoValidSemverTagError: If no tag is a semantic version.
        ValueError: If select is unknown.
    """
    tags = list(tags)
    if not tags:
        raise NoTagsError(
            "0 tags detected",
            hint="Tag a release (e.g. 'git tag v1.0.0') or pass explicit revisions",
        )

    parsed = _parsed(tags)
    if not parsed:
        raise NoValidSemverTagError(
            f"None of the {len(tags)} tags is a semantic version",
            hint="Tags must look like 1.2.3 or v1.2.3",
        )

    # min/max return the first extremum in input order
    if select == "latest":
        _, tag = max(parsed, key=lambda item: item[0])
    elif select == "earliest":
        _, tag = min(parsed, key=lambda item: item[0])
    else:
        raise ValueError(f"select must be 'latest' or 'earliest', got {select!r}")

    logger.debug("Selected %s tag %s out of %d semver tags", select, tag, len(parsed))
    return tag
