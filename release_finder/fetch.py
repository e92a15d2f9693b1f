# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging
import urllib.parse

import github3.exceptions
import github3.github
import requests

import ccc.github
import ccc.gitlab
import http_requests
import model.credentials
import model.provider
import release_finder.model as rm

logger = logging.getLogger(__name__)


class ReleaseFetcherBase:
    '''
    retrieves the releases of one repository. The first successful retrieval is cached for the
    lifetime of the fetcher; failed retrievals are not.
    '''
    def __init__(self, source: rm.Source):
        self.source = source
        self._releases: tuple[rm.Release, ...] | None = None

    def _iter_releases(self) -> collections.abc.Iterable[rm.Release]:
        raise NotImplementedError

    def fetch(self) -> tuple[rm.Release, ...]:
        if self._releases is None:
            self._releases = tuple(self._iter_releases())
            logger.info(f'retrieved {len(self._releases)} release(s) for {self.source.repo=}')

        return self._releases


class GithubReleaseFetcher(ReleaseFetcherBase):
    def __init__(
        self,
        source: rm.Source,
        github_api: github3.github.GitHub,
    ):
        super().__init__(source=source)
        self.github_api = github_api

    def _iter_releases(self):
        try:
            repository = self.github_api.repository(
                self.source.org_name,
                self.source.repository_name,
            )
            if not repository:
                logger.info(f'{self.source.repo=} not found - assuming there are no releases')
                return ()

            # github3 takes care of pagination; releases are returned newest-first
            return tuple(
                rm.Release(
                    tag_name=release.tag_name,
                    display_name=release.name,
                    body=release.body,
                )
                for release in repository.releases()
                if not release.draft
            )
        except github3.exceptions.NotFoundError:
            logger.info(f'{self.source.repo=} not found - assuming there are no releases')
            return ()
        except github3.exceptions.GitHubException as ghe:
            logger.warning(f'failed to retrieve releases for {self.source.repo=}: {ghe}')
            raise rm.SourceUnavailable(
                f'failed to retrieve releases for {self.source.repo}'
            ) from ghe

    def fetch_releases(self) -> tuple[rm.Release, ...]:
        return self.fetch()


class GitlabTagFetcher(ReleaseFetcherBase):
    def __init__(
        self,
        source: rm.Source,
        api_url: str,
        request_builder: http_requests.AuthenticatedRequestBuilder,
        page_size: int=100,
    ):
        super().__init__(source=source)
        self.api_url = api_url.rstrip('/')
        self.request_builder = request_builder
        self.page_size = page_size

    def tags_url(self) -> str:
        project_id = urllib.parse.quote(self.source.repo, safe='')
        return f'{self.api_url}/projects/{project_id}/repository/tags'

    def _iter_tag_dicts(self) -> collections.abc.Generator[dict, None, None]:
        url = self.tags_url()
        page = '1'

        while page:
            try:
                res = self.request_builder.get(
                    url,
                    return_type=None,
                    check_http_code=False,
                    params={'per_page': self.page_size, 'page': page},
                )
            except requests.exceptions.RequestException as rqe:
                logger.warning(f'failed to retrieve tags from {url=}: {rqe}')
                raise rm.SourceUnavailable(
                    f'failed to retrieve tags for {self.source.repo}'
                ) from rqe

            if res.status_code == 404:
                logger.info(f'{self.source.repo=} not found - assuming there are no tags')
                return

            if not res.ok:
                logger.warning(f'rq against {url=} returned {res.status_code=} {res.content=}')
                raise rm.SourceUnavailable(
                    f'failed to retrieve tags for {self.source.repo}: {res.status_code=}'
                )

            try:
                tags = res.json()
            except requests.exceptions.JSONDecodeError as jde:
                logger.warning(f'rq against {url=} returned invalid json: {res.content=}')
                raise rm.SourceUnavailable(
                    f'failed to retrieve tags for {self.source.repo}: invalid response'
                ) from jde

            yield from tags

            page = res.headers.get('X-Next-Page')

    def _iter_releases(self):
        return tuple(
            rm.Release(
                tag_name=tag['name'],
                display_name=None,
                body=tag_body(tag),
            )
            for tag in self._iter_tag_dicts()
        )

    def fetch_tags(self) -> tuple[rm.Release, ...]:
        return self.fetch()


def tag_body(tag: dict) -> str | None:
    '''
    returns the release-notes for the given gitlab-tag (the description of the release created
    for the tag, falling back to the tag-message)
    '''
    if (release := tag.get('release')) and (description := release.get('description')):
        if description.strip():
            return description

    if (message := tag.get('message')) and message.strip():
        return message

    return None


def fetcher_for_source(
    source: rm.Source,
    credentials: collections.abc.Iterable[dict | model.credentials.GitSourceCredentials]=(),
    provider_cfg: model.provider.ProviderConfig | None=None,
) -> ReleaseFetcherBase:
    if provider_cfg:
        provider_cfg.validate()
    else:
        provider_cfg = model.provider.default_provider_cfg(source.provider)

    if provider_cfg.provider() is not source.provider:
        raise ValueError(f'{provider_cfg.name()=} does not match {source.provider=}')

    creds = model.credentials.credentials_for_host(
        credentials=credentials,
        host=provider_cfg.hostname(),
    )

    if source.provider is model.provider.Provider.GITHUB:
        return GithubReleaseFetcher(
            source=source,
            github_api=ccc.github.github_api(
                provider_cfg=provider_cfg,
                credentials=creds,
            ),
        )
    elif source.provider is model.provider.Provider.GITLAB:
        return GitlabTagFetcher(
            source=source,
            api_url=provider_cfg.api_url(),
            request_builder=ccc.gitlab.request_builder(
                provider_cfg=provider_cfg,
                credentials=creds,
            ),
        )
    else:
        raise NotImplementedError(source.provider)
