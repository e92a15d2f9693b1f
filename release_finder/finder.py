# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import functools
import logging

import model.credentials
import model.provider
import release_finder.fetch as rf
import release_finder.markdown as rmd
import release_finder.model as rm
import release_finder.select as rs

logger = logging.getLogger(__name__)


class ReleaseFinder:
    '''
    finds (and renders) the release-notes published on a source-control hosting provider for the
    versions between a dependency's previous and new version.

    A finder is intended to be used for exactly one comparison: releases are retrieved at most
    once per finder (unless retrieval fails), and never refreshed.
    '''

    def __init__(
        self,
        dependency: rm.Dependency,
        source: rm.Source | None,
        credentials: collections.abc.Iterable[dict | model.credentials.GitSourceCredentials]=(),
        provider_cfg: model.provider.ProviderConfig | None=None,
    ):
        self.dependency = dependency
        self.source = source
        self.credentials = tuple(credentials or ())

        if provider_cfg:
            provider_cfg.validate()
        elif source:
            provider_cfg = model.provider.default_provider_cfg(source.provider)
        self.provider_cfg = provider_cfg

    @functools.cached_property
    def _release_fetcher(self) -> rf.ReleaseFetcherBase:
        return rf.fetcher_for_source(
            source=self.source,
            credentials=self.credentials,
            provider_cfg=self.provider_cfg,
        )

    def releases_url(self) -> str | None:
        if not self.source:
            return None

        repo_url = f'{self.provider_cfg.http_url()}/{self.source.repo}'

        if self.source.provider is model.provider.Provider.GITHUB:
            return f'{repo_url}/releases'
        elif self.source.provider is model.provider.Provider.GITLAB:
            return f'{repo_url}/tags'
        else:
            raise NotImplementedError(self.source.provider)

    def _fetch_releases(self) -> tuple[rm.Release, ...]:
        if self.source.provider is model.provider.Provider.GITHUB:
            return self._release_fetcher.fetch_releases()
        elif self.source.provider is model.provider.Provider.GITLAB:
            return self._release_fetcher.fetch_tags()
        else:
            raise NotImplementedError(self.source.provider)

    def relevant_releases(self) -> list[rm.Release]:
        if not self.source:
            return []

        return rs.select_range(
            releases=self._fetch_releases(),
            dependency_name=self.dependency.name,
            previous_version=self.dependency.previous_version,
            new_version=self.dependency.new_version,
        )

    def releases_text(self) -> str | None:
        '''
        returns the release-notes for the versions in `(previous_version, new_version]`, or
        `None` if there are none (or all of them are blank).

        raises `SourceUnavailable` if releases could not be retrieved.
        '''
        if not self.source:
            logger.debug(f'no source known for {self.dependency.name=}')
            return None

        return rmd.compose(self.relevant_releases())
