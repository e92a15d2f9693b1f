# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging

from model.base import BasicCredentials

logger = logging.getLogger(__name__)

GIT_SOURCE = 'git_source'


class GitSourceCredentials(BasicCredentials):
    '''
    credentials for a source-control hosting provider, keyed by the provider's hostname.
    `password` is expected to be an access token.
    '''

    def type(self) -> str:
        return self.raw.get('type')

    def host(self) -> str:
        return self.raw.get('host')

    def _required_attributes(self):
        required_attribs = set(super()._required_attributes())
        return required_attribs | {'type', 'host'}

    def validate(self):
        # additional attributes (used by other consumers of the same credentials) are tolerated
        self._validate_required_attributes()


def credentials_for_host(
    credentials: collections.abc.Iterable[dict | GitSourceCredentials],
    host: str,
) -> GitSourceCredentials | None:
    '''
    returns the first git-source-credentials for the given host, or `None` if there are none.
    Credentials of other types are ignored. Credentials may be passed either as raw dicts, or as
    `GitSourceCredentials`.
    '''
    for creds in credentials or ():
        if isinstance(creds, dict):
            creds = GitSourceCredentials(raw_dict=creds)

        if creds.type() != GIT_SOURCE:
            continue

        if not creds.host() or creds.host().lower() != host.lower():
            continue

        creds.validate()
        logger.debug(f'using credentials for {host=} ({creds.username()=})')
        return creds

    return None
