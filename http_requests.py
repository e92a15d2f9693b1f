# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import logging

import requests

from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)


def mount_default_adapter(
    session: requests.Session,
    connection_pool_cache_size=32, # requests-library default
    max_pool_size=32, # requests-library default
):
    '''
    mounts an http-adapter for both http and https to the given session.

    Note that no retries are configured: failed requests are to be reported to callers
    immediately.
    '''
    default_http_adapter = HTTPAdapter(
        pool_connections=connection_pool_cache_size,
        pool_maxsize=max_pool_size,
    )
    session.mount('http://', default_http_adapter)
    session.mount('https://', default_http_adapter)

    return session


class AuthenticatedRequestBuilder:
    '''
    Wrapper around the 'requests' library, handling authorisation headers and (optionally)
    checking for http response codes.
    '''

    def __init__(
            self,
            auth_token: str=None,
            verify_ssl: bool=True,
    ):
        self.headers = None

        if auth_token:
            self.headers = {'Authorization': 'Bearer {}'.format(auth_token)}

        self.session = mount_default_adapter(requests.Session())

        self.verify_ssl = verify_ssl

    def _check_http_code(self, result, url):
        if not result.ok:
            logger.warning(
                f'rq against {url=} returned {result.status_code=} {result.content=}'
            )
            result.raise_for_status()

    def _request(self,
            method, url: str,
            return_type: str='json',
            check_http_code=True,
            **kwargs
        ):
        headers = self.headers.copy() if self.headers else {}
        if 'headers' in kwargs:
            headers.update(kwargs['headers'])
            del kwargs['headers']
        try:
            timeout = kwargs.pop('timeout')
        except KeyError:
            timeout = (4, 31)

        result = method(
            url,
            headers=headers,
            verify=self.verify_ssl,
            timeout=timeout,
            **kwargs
        )

        if check_http_code:
            self._check_http_code(result, url)

        if return_type == 'json':
            return result.json()

        return result

    def get(self, url: str, return_type: str='json', **kwargs):
        return self._request(
                method=self.session.get,
                url=url,
                return_type=return_type,
                **kwargs
        )
