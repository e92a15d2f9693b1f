# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import json
import os
import types

import pytest

own_dir = os.path.abspath(os.path.dirname(__file__))
fixtures_dir = os.path.join(own_dir, 'fixtures')


@pytest.fixture
def fixture():
    def _fixture(*path):
        with open(os.path.join(fixtures_dir, *path)) as f:
            return json.load(f)
    return _fixture


@pytest.fixture
def github_releases(fixture):
    '''
    returns objects resembling `github3.repos.release.Release` for the given fixture-file
    '''
    def _github_releases(fname):
        return [
            types.SimpleNamespace(
                tag_name=raw['tag_name'],
                name=raw['name'],
                body=raw['body'],
                draft=raw.get('draft', False),
            )
            for raw in fixture('github', fname)
        ]
    return _github_releases
