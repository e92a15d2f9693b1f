# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import enum
import urllib.parse

from model.base import (
    ModelValidationError,
    NamedModelElement,
)


class Provider(enum.StrEnum):
    GITHUB = 'github'
    GITLAB = 'gitlab'


class ProviderConfig(NamedModelElement):
    '''
    describes how to reach a source-control hosting provider (the human-facing http-url, and the
    url of the provider's rest-api).
    '''

    def provider(self) -> Provider:
        return Provider(self.raw['provider'])

    def http_url(self) -> str:
        return self.raw['httpUrl'].rstrip('/')

    def api_url(self) -> str:
        return self.raw['apiUrl'].rstrip('/')

    def hostname(self) -> str:
        return urllib.parse.urlparse(self.http_url()).hostname

    def tls_validation(self) -> bool:
        return not self.raw.get('disable_tls_validation', False)

    def _required_attributes(self):
        return (
            'provider',
            'httpUrl',
            'apiUrl',
        )

    def _optional_attributes(self):
        return (
            'disable_tls_validation',
        )

    def validate(self):
        super().validate()
        try:
            self.provider()
        except ValueError as ve:
            raise ModelValidationError(f'{self.name()}: unsupported provider') from ve

        for url in (self.http_url(), self.api_url()):
            parsed = urllib.parse.urlparse(url)
            if not parsed.scheme or not parsed.hostname:
                raise ModelValidationError(f'{self.name()}: not a valid url: {url=}')


_default_provider_cfgs = {
    Provider.GITHUB: {
        'provider': Provider.GITHUB,
        'httpUrl': 'https://github.com',
        'apiUrl': 'https://api.github.com',
    },
    Provider.GITLAB: {
        'provider': Provider.GITLAB,
        'httpUrl': 'https://gitlab.com',
        'apiUrl': 'https://gitlab.com/api/v4',
    },
}


def default_provider_cfg(provider: Provider | str) -> ProviderConfig:
    provider = Provider(provider)

    return ProviderConfig(
        name=str(provider),
        raw_dict=dict(_default_provider_cfgs[provider]),
    )
