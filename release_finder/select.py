# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging

import release_finder.model as rm
import release_finder.tag as rt
import version as version_util

logger = logging.getLogger(__name__)


def release_version(
    release: rm.Release,
    dependency_name: str,
    tag_format: rt.TagFormat,
    anchor_field: str='tag_name',
) -> str | None:
    '''
    returns the version the given release was published for, by reversing the given tag-format
    on the release's `anchor_field` (i.e. the field the tag-format was inferred from), or, if that
    does not follow the format, on its other candidate-name.
    Returns `None` if neither follows the format.
    '''
    candidates = sorted(
        release.candidates,
        key=lambda field_and_value: field_and_value[0] != anchor_field,
    )
    for _, candidate in candidates:
        if (parsed := tag_format.parse(candidate, dependency_name)):
            return parsed
    return None


def _anchor_field(
    releases: collections.abc.Iterable[rm.Release],
    anchor: rt.TagMatch,
) -> str:
    # candidates are resolved in the same order, so the first equal one is the anchoring one
    for release in releases:
        for field_name, value in release.candidates:
            if value == anchor.tag:
                return field_name
    return 'tag_name'


def select_range(
    releases: collections.abc.Iterable[rm.Release],
    dependency_name: str,
    previous_version: str | None,
    new_version: str | None,
) -> list[rm.Release]:
    '''
    selects the releases published for versions in `(previous_version, new_version]`, sorted
    descending by version (releases for identical versions retain the given order).

    The tag-naming-convention is inferred from the release matching `new_version`. If there is no
    such release, nothing is selected. If `previous_version` is `None`, all releases up to
    (and including) `new_version` are selected.
    '''
    if not new_version:
        return []

    releases = tuple(releases)

    for boundary in (new_version, previous_version):
        if boundary and not version_util.is_version(boundary):
            logger.warning(f'cannot select releases for invalid version: {boundary=}')
            return []

    anchor = rt.resolve_tag(
        version=new_version,
        dependency_name=dependency_name,
        known_tags=(value for release in releases for _, value in release.candidates),
    )
    if not anchor:
        logger.info(f'no release found for {dependency_name=} {new_version=}')
        return []

    anchor_field = _anchor_field(releases=releases, anchor=anchor)
    logger.debug(f'using {anchor.tag_format=!s} (inferred from {anchor.tag=}, {anchor_field=})')

    selected = []
    for release in releases:
        if not (resolved_version := release_version(
            release=release,
            dependency_name=dependency_name,
            tag_format=anchor.tag_format,
            anchor_field=anchor_field,
        )):
            logger.debug(f'skipping {release.tag_name=} (does not follow {anchor.tag_format!s})')
            continue

        try:
            if not version_util.in_range(
                version=resolved_version,
                lower=previous_version or None,
                upper=new_version,
            ):
                continue
        except version_util.InvalidVersion as iv:
            logger.debug(f'skipping {release.tag_name=}: {iv}')
            continue

        selected.append((version_util.Version(resolved_version), release))

    # sorted is stable, thus releases for equal versions retain their (provider-)order
    selected = sorted(
        selected,
        key=lambda version_and_release: version_and_release[0],
        reverse=True,
    )

    return [release for _, release in selected]
