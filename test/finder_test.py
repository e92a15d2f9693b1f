# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

from unittest import mock
from unittest.mock import MagicMock

import github3.exceptions
import pytest

import model.base
import model.provider
import release_finder.finder as examinee
import release_finder.model as rm

credentials = [{
    'type': 'git_source',
    'host': 'github.com',
    'username': 'x-access-token',
    'password': 'token',
}]


@pytest.fixture
def github_api(github_releases):
    '''
    patches the github-api-factory; the returned mock's `releases` attribute may be set to the
    name of a fixture-file
    '''
    github_api = MagicMock()
    github_api.repository.return_value.releases.side_effect = lambda: github_releases(
        github_api.releases,
    )
    github_api.releases = 'business_releases.json'

    with mock.patch('ccc.github.github_api', return_value=github_api):
        yield github_api


def finder(
    new_version='1.8.0',
    previous_version='1.7.0',
    dependency_name='business',
    source=rm.Source(provider='github', repo='gocardless/business'),
):
    return examinee.ReleaseFinder(
        dependency=rm.Dependency(
            name=dependency_name,
            new_version=new_version,
            previous_version=previous_version,
        ),
        source=source,
        credentials=credentials,
    )


@pytest.mark.parametrize('source,expected', [
    (
        rm.Source(provider='github', repo='gocardless/business'),
        'https://github.com/gocardless/business/releases',
    ),
    (
        rm.Source(provider='gitlab', repo='org/business'),
        'https://gitlab.com/org/business/tags',
    ),
    (None, None),
])
def test_releases_url(source, expected):
    assert finder(source=source).releases_url() == expected


def test_releases_text_from_one_version_previous(github_api):
    assert finder().releases_text() == (
        '## v1.8.0\n'
        '- Add 2018-2027 TARGET holiday defintions\n'
        '- Add 2018-2027 Bankgirot holiday defintions'
    )


def test_releases_text_is_cached(github_api):
    release_finder = finder()

    release_finder.releases_text()
    release_finder.releases_text()

    github_api.repository.assert_called_once_with('gocardless', 'business')


def test_releases_text_authenticates():
    with mock.patch('ccc.github.github_api') as github_api_mock:
        github_api_mock.return_value.repository.return_value.releases.return_value = []
        finder().releases_text()

    assert github_api_mock.call_args.kwargs['credentials'].passwd() == 'token'


def test_releases_text_with_prefixed_tags(github_api):
    github_api.releases = 'prefixed_releases.json'

    assert finder().releases_text() == (
        '## business-1.8.0\n'
        '- Add 2018-2027 TARGET holiday defintions\n'
        '- Add 2018-2027 Bankgirot holiday defintions'
    )


@pytest.mark.parametrize('new_version,previous_version', [
    ('1.7.0', '1.7.0.beta'), # blank
    ('1.7.0.beta', '1.7.0.alpha'), # nil
    ('1.7.0', '1.6.0'), # all versions in range are blank
])
def test_releases_text_blank(github_api, new_version, previous_version):
    assert finder(new_version=new_version, previous_version=previous_version).releases_text() is None


def test_releases_text_with_blank_names(github_api):
    github_api.releases = 'releases_no_names.json'

    assert finder().releases_text() == (
        '## v1.8.0\n'
        '- Add 2018-2027 TARGET holiday defintions\n'
        '- Add 2018-2027 Bankgirot holiday defintions'
    )


@pytest.mark.parametrize('dependency_name', ['net.sf.jasperreports:jasperreports', 'business'])
def test_releases_text_with_dash_tags(github_api, dependency_name):
    github_api.releases = 'releases_dash_tags.json'

    release_finder = finder(
        new_version='6.5.1',
        previous_version='6.4.0',
        dependency_name=dependency_name,
    )

    assert release_finder.releases_text() == (
        '## JasperReports 6.5.1\n'
        'Body for 6.5.1\n'
        '\n'
        '## JasperReports 6.5.0\n'
        'Body for 6.5.0\n'
        '\n'
        '## JasperReports 6.4.3\n'
        'Body for 6.4.3\n'
        '\n'
        '## JasperReports 6.4.1\n'
        'Body for 6.4.1'
    )


def test_releases_text_from_several_versions_previous(github_api):
    assert finder(previous_version='1.6.0').releases_text() == (
        '## v1.8.0\n'
        '- Add 2018-2027 TARGET holiday defintions\n'
        '- Add 2018-2027 Bankgirot holiday defintions\n'
        '\n'
        '## v1.7.0\n'
        'No release notes provided.\n'
        '\n'
        '## v1.7.0.beta\n'
        'No release notes provided.\n'
        '\n'
        '## v1.7.0.alpha\n'
        'No release notes provided.'
    )


def test_releases_text_latest_version_blank(github_api):
    assert finder(new_version='1.7.0', previous_version='1.5.0').releases_text() == (
        '## v1.7.0\n'
        'No release notes provided.\n'
        '\n'
        '## v1.7.0.beta\n'
        'No release notes provided.\n'
        '\n'
        '## v1.7.0.alpha\n'
        'No release notes provided.\n'
        '\n'
        '## v1.6.0\n'
        'Mad props to @greysteil for the @angular/scope work'
    )


def test_releases_text_previous_version_without_release(github_api):
    assert finder(previous_version='1.5.1').releases_text() == (
        '## v1.8.0\n'
        '- Add 2018-2027 TARGET holiday defintions\n'
        '- Add 2018-2027 Bankgirot holiday defintions\n'
        '\n'
        '## v1.7.0\n'
        'No release notes provided.\n'
        '\n'
        '## v1.7.0.beta\n'
        'No release notes provided.\n'
        '\n'
        '## v1.7.0.alpha\n'
        'No release notes provided.\n'
        '\n'
        '## v1.6.0\n'
        'Mad props to @greysteil for the @angular/scope work'
    )


def test_releases_text_release_not_present(github_api):
    # v1.9.0 is a draft
    assert finder(new_version='1.9.0', previous_version='1.8.0').releases_text() is None


def test_releases_text_blank_named_release_excluded(github_api):
    github_api.releases = 'releases_ember_cp.json'

    release_finder = finder(
        new_version='3.5.3',
        previous_version='3.5.2',
        dependency_name='ember-computed-decorators',
    )

    assert release_finder.releases_text() is None


def test_releases_text_with_bad_name(github_api):
    github_api.releases = 'business_releases_bad_name.json'

    assert finder().releases_text() == (
        '## v1.7.0\n'
        '- Add 2018-2027 TARGET holiday defintions\n'
        '- Add 2018-2027 Bankgirot holiday defintions'
    )


def test_releases_text_without_new_version(github_api):
    assert finder(new_version=None).releases_text() is None


def test_releases_text_without_releases(github_api):
    github_api.repository.return_value = None

    assert finder().releases_text() is None


def test_releases_text_source_unavailable(github_api):
    error = github3.exceptions.ServerError(MagicMock(status_code=503))
    github_api.repository.side_effect = error

    with pytest.raises(rm.SourceUnavailable) as exc_info:
        finder().releases_text()

    assert exc_info.value.__cause__ is error


def test_releases_text_with_gitlab_source(fixture):
    response = MagicMock()
    response.status_code = 200
    response.ok = True
    response.json.return_value = fixture('gitlab', 'business_tags.json')
    response.headers = {'X-Next-Page': ''}

    with mock.patch('ccc.gitlab.request_builder') as request_builder_mock:
        request_builder_mock.return_value.get.return_value = response

        release_finder = finder(
            new_version='1.4.0',
            previous_version='1.3.0',
            source=rm.Source(provider='gitlab', repo='org/business'),
        )

        assert release_finder.releases_text() == (
            '## v1.4.0\n'
            'Some release notes'
        )

    request_builder_mock.return_value.get.assert_called_once()
    assert request_builder_mock.return_value.get.call_args.args == (
        'https://gitlab.com/api/v4/projects/org%2Fbusiness/repository/tags',
    )


def test_without_source():
    with mock.patch('ccc.github.github_api') as github_api_mock:
        release_finder = finder(source=None)

        assert release_finder.releases_url() is None
        assert release_finder.releases_text() is None

    github_api_mock.assert_not_called()


def test_with_custom_provider_cfg(github_api):
    provider_cfg = model.provider.ProviderConfig(
        name='github-enterprise',
        raw_dict={
            'provider': 'github',
            'httpUrl': 'https://github.example.org/',
            'apiUrl': 'https://github.example.org/api/v3',
        },
    )

    release_finder = examinee.ReleaseFinder(
        dependency=rm.Dependency(name='business', new_version='1.8.0', previous_version='1.7.0'),
        source=rm.Source(provider='github', repo='gocardless/business'),
        provider_cfg=provider_cfg,
    )

    assert release_finder.releases_url() == 'https://github.example.org/gocardless/business/releases'
    assert release_finder.releases_text().startswith('## v1.8.0\n')


@pytest.mark.parametrize('raw_dict', [
    {'provider': 'gitlab', 'httpUrl': 'https://gitlab.example.org'},
    {'provider': 'gitlab', 'httpUrl': 'https://gitlab.example.org', 'apiUrl': 'gitlab.example.org'},
])
def test_with_invalid_provider_cfg(raw_dict):
    with pytest.raises(model.base.ModelValidationError):
        examinee.ReleaseFinder(
            dependency=rm.Dependency(name='business', new_version='1.4.0'),
            source=rm.Source(provider='gitlab', repo='org/business'),
            provider_cfg=model.provider.ProviderConfig(name='gitlab-mirror', raw_dict=raw_dict),
        )
