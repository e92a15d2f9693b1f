# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import functools
import logging

import github3.github
import github3.session

import http_requests
import model.credentials
import model.provider

logger = logging.getLogger(__name__)


def github_api_ctor(
    provider_cfg: model.provider.ProviderConfig,
):
    '''returns the appropriate github3.GitHub constructor for the given provider-cfg

    In case the provider's http-url does not refer to github.com, the c'tor for GithubEnterprise
    is returned with the url argument preset, thus disburdening users to differentiate
    between github.com and non-github.com cases.
    '''
    if provider_cfg.provider() is not model.provider.Provider.GITHUB:
        raise ValueError(f'not a github provider-cfg: {provider_cfg.name()}')

    hostname = provider_cfg.hostname()
    if not hostname:
        raise ValueError(f'failed to parse url: {provider_cfg.http_url()}')

    session = http_requests.mount_default_adapter(
        session=github3.session.GitHubSession(),
    )

    if hostname.lower() == 'github.com':
        return functools.partial(
            github3.github.GitHub,
            session=session,
        )
    else:
        return functools.partial(
            github3.github.GitHubEnterprise,
            url=provider_cfg.http_url(),
            verify=provider_cfg.tls_validation(),
            session=session,
        )


def github_api(
    provider_cfg: model.provider.ProviderConfig,
    credentials: model.credentials.GitSourceCredentials | None=None,
) -> github3.github.GitHub:
    '''
    returns a github3 api object for the given provider-cfg. If credentials are passed, the
    api object will be authenticated using the credentials' password as (access) token.
    Otherwise, an anonymous api object is returned.
    '''
    github_ctor = github_api_ctor(provider_cfg=provider_cfg)

    if credentials:
        return github_ctor(token=credentials.passwd())

    logger.info(f'no credentials for {provider_cfg.hostname()=} - using anonymous access')
    return github_ctor()
