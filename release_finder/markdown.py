# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import dataclasses
import logging

import release_finder.model as rm

logger = logging.getLogger(__name__)

NO_RELEASE_NOTES = 'No release notes provided.'
RELEASE_SEPARATOR = '\n\n'


@dataclasses.dataclass
class Header:
    level: int
    title: str

    def __str__(self):
        return f"{'#' * self.level} {self.title}\n"  # there should be a new line after the header


def render_release(release: rm.Release) -> str:
    if release.body and release.body.strip():
        body = release.body.strip()
    else:
        body = NO_RELEASE_NOTES

    return f'{Header(level=2, title=release.header)}{body}'


def compose(
    releases: collections.abc.Sequence[rm.Release],
) -> str | None:
    '''
    renders the given releases (expected to be ordered newest-first) into a markdown-text.

    If there are no releases, or all releases are blank (neither name nor body), `None` is
    returned. Otherwise, all releases are rendered (blank ones with a placeholder).
    '''
    if not releases:
        return None

    if all(release.is_blank for release in releases):
        logger.info(f'all {len(releases)} release(s) are blank - omitting release notes')
        return None

    return RELEASE_SEPARATOR.join(render_release(release) for release in releases)
