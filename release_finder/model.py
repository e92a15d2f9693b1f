# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import dataclasses

from model.provider import Provider


class SourceUnavailable(RuntimeError):
    '''
    raised if releases could not be retrieved from a source-control hosting provider (e.g. due
    to network errors, or unexpected http-status-codes). Note that absent repositories, or
    repositories without any releases are not considered an error.
    '''
    pass


def _blank(value: str | None) -> bool:
    return not value or not value.strip()


@dataclasses.dataclass(frozen=True)
class Dependency:
    name: str
    new_version: str | None = None
    previous_version: str | None = None

    def __post_init__(self):
        # empty versions are treated as absent
        if _blank(self.new_version):
            object.__setattr__(self, 'new_version', None)
        if _blank(self.previous_version):
            object.__setattr__(self, 'previous_version', None)


@dataclasses.dataclass(frozen=True)
class Source:
    provider: Provider
    repo: str

    def __post_init__(self):
        object.__setattr__(self, 'provider', Provider(self.provider))
        object.__setattr__(self, 'repo', self.repo.strip('/'))

    @property
    def org_name(self) -> str:
        return self.repo.split('/', 1)[0]

    @property
    def repository_name(self) -> str:
        return self.repo.rsplit('/', 1)[-1]


@dataclasses.dataclass(frozen=True)
class Release:
    tag_name: str
    display_name: str | None = None
    body: str | None = None

    @property
    def is_blank(self) -> bool:
        return _blank(self.display_name) and _blank(self.body)

    @property
    def header(self) -> str:
        if _blank(self.display_name):
            return self.tag_name
        return self.display_name

    @property
    def candidates(self) -> collections.abc.Generator[tuple[str, str], None, None]:
        '''
        the (non-blank) strings versions are matched against, as `(field_name, value)`-pairs
        (the tag-name first, followed by the display-name)
        '''
        for field_name in ('tag_name', 'display_name'):
            if not _blank(value := getattr(self, field_name)):
                yield field_name, value

    @property
    def candidate_names(self) -> collections.abc.Generator[str, None, None]:
        for _, value in self.candidates:
            yield value
