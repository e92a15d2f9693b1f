# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

from unittest import mock

import pytest

import ccc.github
import ccc.gitlab
import model.credentials
import model.provider


@pytest.fixture
def credentials():
    return model.credentials.GitSourceCredentials(raw_dict={
        'type': 'git_source',
        'host': 'github.com',
        'username': 'x-access-token',
        'password': 'token',
    })


def test_github_api_authenticates_with_token(credentials):
    with mock.patch('github3.github.GitHub') as github_mock:
        github_api = ccc.github.github_api(
            provider_cfg=model.provider.default_provider_cfg('github'),
            credentials=credentials,
        )

    assert github_api is github_mock.return_value
    assert github_mock.call_args.kwargs['token'] == 'token'


def test_github_api_anonymous():
    with mock.patch('github3.github.GitHub') as github_mock:
        ccc.github.github_api(
            provider_cfg=model.provider.default_provider_cfg('github'),
        )

    assert 'token' not in github_mock.call_args.kwargs


def test_github_api_enterprise(credentials):
    provider_cfg = model.provider.ProviderConfig(
        name='github-enterprise',
        raw_dict={
            'provider': 'github',
            'httpUrl': 'https://github.example.org',
            'apiUrl': 'https://github.example.org/api/v3',
            'disable_tls_validation': True,
        },
    )

    with mock.patch('github3.github.GitHubEnterprise') as github_mock:
        github_api = ccc.github.github_api(
            provider_cfg=provider_cfg,
            credentials=credentials,
        )

    assert github_api is github_mock.return_value
    call_kwargs = github_mock.call_args.kwargs
    assert call_kwargs['url'] == 'https://github.example.org'
    assert call_kwargs['verify'] is False
    assert call_kwargs['token'] == 'token'


def test_github_api_rejects_other_providers():
    with pytest.raises(ValueError):
        ccc.github.github_api(provider_cfg=model.provider.default_provider_cfg('gitlab'))


def test_gitlab_request_builder(credentials):
    request_builder = ccc.gitlab.request_builder(
        provider_cfg=model.provider.default_provider_cfg('gitlab'),
        credentials=credentials,
    )

    assert request_builder.headers == {'Authorization': 'Bearer token'}
    assert request_builder.verify_ssl

    anonymous_request_builder = ccc.gitlab.request_builder(
        provider_cfg=model.provider.default_provider_cfg('gitlab'),
    )
    assert anonymous_request_builder.headers is None

    with pytest.raises(ValueError):
        ccc.gitlab.request_builder(provider_cfg=model.provider.default_provider_cfg('github'))
