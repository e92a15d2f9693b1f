# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

'''
infers the naming-convention a repository uses for release-tags (or release-names) from observed
tags, and maps versions to tags (and vice versa) using the inferred convention.

Supported conventions are tried in the order given by `TAG_FORMATS`:

- `exact`:        `1.7.0`
- `v-prefixed`:   `v1.7.0`
- `name-dash`:    `business-1.7.0`
- `name-loose`:   any tag containing both the dependency-name and the version, e.g.
                  `JasperReports 6.5.1` (or a tag that is exactly the version)
- `version-only`: any tag containing the version (fallback)
'''

import collections.abc
import dataclasses
import logging
import re
import typing

import version as version_util

logger = logging.getLogger(__name__)

# a version-like token (starts w/ a digit), optionally prefixed w/ `v`, not glued to other words
_version_token = re.compile(r'(?<![\w.])[vV]?(\d+(?:[.-]\w+)*)(?!\w)')


def _looks_like_version(candidate: str) -> bool:
    return candidate[:1].isdigit() and version_util.is_version(candidate)


def _names(dependency_name: str) -> tuple[str, ...]:
    '''
    returns the (lower-cased) names a dependency may appear as in tags. For maven-style names
    (`group:artifact`), the artifact-id is considered as well.
    '''
    name = dependency_name.strip().lower()
    names = [name]
    if ':' in name:
        names.append(name.rsplit(':', 1)[-1])
    return tuple(n for n in names if n)


def _bounded_version_pattern(version: str) -> re.Pattern:
    # the version must neither be part of a longer version (`6.5.10`, `1.7.0.beta`), nor glued
    # to a preceding word (except for a `v` prefix)
    return re.compile(
        r'(?<![\w.])[vV]?' + re.escape(version) + r'(?![\w+]|[.-]\w)'
    )


def _contains_version(entry: str, version: str) -> bool:
    return bool(_bounded_version_pattern(version).search(entry))


def _first_version_token(entry: str) -> str | None:
    for match in _version_token.finditer(entry):
        if _looks_like_version(candidate := match.group(1)):
            return candidate
    return None


def _render_exact(version: str, dependency_name: str) -> str:
    return version


def _matches_exact(entry: str, version: str, dependency_name: str) -> bool:
    return entry == version


def _parse_exact(entry: str, dependency_name: str) -> str | None:
    if _looks_like_version(entry):
        return entry
    return None


def _render_v_prefixed(version: str, dependency_name: str) -> str:
    return f'v{version}'


def _matches_v_prefixed(entry: str, version: str, dependency_name: str) -> bool:
    return entry[:1] in ('v', 'V') and entry[1:] == version


def _parse_v_prefixed(entry: str, dependency_name: str) -> str | None:
    if entry[:1] in ('v', 'V') and _looks_like_version(entry[1:]):
        return entry[1:]
    return None


def _render_name_dash(version: str, dependency_name: str) -> str:
    return f'{dependency_name}-{version}'


def _matches_name_dash(entry: str, version: str, dependency_name: str) -> bool:
    entry = entry.lower()
    return any(
        entry == f'{name}-{version.lower()}'
        for name in _names(dependency_name)
    )


def _parse_name_dash(entry: str, dependency_name: str) -> str | None:
    for name in _names(dependency_name):
        prefix = f'{name}-'
        if not entry.lower().startswith(prefix):
            continue
        if _looks_like_version(candidate := entry[len(prefix):]):
            return candidate
    return None


def _render_name_loose(version: str, dependency_name: str) -> str:
    return f'{dependency_name} {version}'


def _contains_name(entry: str, dependency_name: str) -> bool:
    entry = entry.lower()
    return any(name in entry for name in _names(dependency_name))


def _matches_name_loose(entry: str, version: str, dependency_name: str) -> bool:
    if entry == version:
        return True
    return _contains_name(entry, dependency_name) and _contains_version(entry, version)


def _parse_name_loose(entry: str, dependency_name: str) -> str | None:
    if _looks_like_version(entry):
        return entry
    if not _contains_name(entry, dependency_name):
        return None
    return _first_version_token(entry)


def _render_version_only(version: str, dependency_name: str) -> str:
    return version


def _matches_version_only(entry: str, version: str, dependency_name: str) -> bool:
    return _contains_version(entry, version)


def _parse_version_only(entry: str, dependency_name: str) -> str | None:
    return _first_version_token(entry)


@dataclasses.dataclass(frozen=True)
class TagFormat:
    name: str
    render: typing.Callable[[str, str], str]
    matches: typing.Callable[[str, str, str], bool]
    parse: typing.Callable[[str, str], str | None]

    def __str__(self):
        return self.name


EXACT = TagFormat(
    name='exact',
    render=_render_exact,
    matches=_matches_exact,
    parse=_parse_exact,
)
V_PREFIXED = TagFormat(
    name='v-prefixed',
    render=_render_v_prefixed,
    matches=_matches_v_prefixed,
    parse=_parse_v_prefixed,
)
NAME_DASH = TagFormat(
    name='name-dash',
    render=_render_name_dash,
    matches=_matches_name_dash,
    parse=_parse_name_dash,
)
NAME_LOOSE = TagFormat(
    name='name-loose',
    render=_render_name_loose,
    matches=_matches_name_loose,
    parse=_parse_name_loose,
)
VERSION_ONLY = TagFormat(
    name='version-only',
    render=_render_version_only,
    matches=_matches_version_only,
    parse=_parse_version_only,
)

# order matters: the first format matching the anchoring version wins
TAG_FORMATS = (
    EXACT,
    V_PREFIXED,
    NAME_DASH,
    NAME_LOOSE,
    VERSION_ONLY,
)


@dataclasses.dataclass(frozen=True)
class TagMatch:
    tag: str
    version: str
    tag_format: TagFormat


def resolve_tag(
    version: str,
    dependency_name: str,
    known_tags: collections.abc.Iterable[str],
    tag_format: TagFormat | None=None,
) -> TagMatch | None:
    '''
    finds the tag (or release-name) for the given version amongst `known_tags`.

    If no `tag_format` is passed, the naming-convention is inferred: candidate formats are tried
    in the order defined by `TAG_FORMATS`; for each format, `known_tags` are scanned in the given
    order (which is expected to be the order returned by the hosting provider). The returned
    `TagMatch` carries the format that matched, which is to be passed to subsequent calls, so
    that all versions are resolved using the same convention.

    Returns `None` if no tag matches.
    '''
    if not version:
        return None

    known_tags = tuple(t for t in known_tags if t)

    if tag_format:
        tag_formats = (tag_format,)
    else:
        tag_formats = TAG_FORMATS

    for candidate_format in tag_formats:
        for tag in known_tags:
            if candidate_format.matches(tag, version, dependency_name):
                logger.debug(f'{version=} matched {tag=} ({candidate_format=!s})')
                return TagMatch(
                    tag=tag,
                    version=version,
                    tag_format=candidate_format,
                )

    logger.debug(f'no tag found for {version=} of {dependency_name=}')
    return None
