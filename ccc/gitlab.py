# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import logging

import http_requests
import model.credentials
import model.provider

logger = logging.getLogger(__name__)


def request_builder(
    provider_cfg: model.provider.ProviderConfig,
    credentials: model.credentials.GitSourceCredentials | None=None,
) -> http_requests.AuthenticatedRequestBuilder:
    if provider_cfg.provider() is not model.provider.Provider.GITLAB:
        raise ValueError(f'not a gitlab provider-cfg: {provider_cfg.name()}')

    if credentials:
        auth_token = credentials.passwd()
    else:
        logger.info(f'no credentials for {provider_cfg.hostname()=} - using anonymous access')
        auth_token = None

    return http_requests.AuthenticatedRequestBuilder(
        auth_token=auth_token,
        verify_ssl=provider_cfg.tls_validation(),
    )
