"""
Installer sequence — install the freshly mounted site and log in.

Responses are not inspected: on an ephemeral local site the install
either works or the next request shows the problem anyway.
"""

from __future__ import annotations

import logging

from wpnow.adapters.base import PhpRequest, PhpResponse, RequestRunner
from wpnow.core.models.install import (
    DEFAULT_CREDENTIALS,
    INSTALL_URL,
    LOGIN_URL,
    DevCredentials,
    install_form,
    login_form,
)

logger = logging.getLogger(__name__)


def register_user(
    runner: RequestRunner, credentials: DevCredentials = DEFAULT_CREDENTIALS
) -> PhpResponse:
    """Run step 2 of the WordPress installer with the dev admin account."""
    logger.info("Installing WordPress (admin user %r)", credentials.username)
    return runner.request(
        PhpRequest(url=INSTALL_URL, method="POST", form_data=install_form(credentials))
    )


def auto_login(
    runner: RequestRunner, credentials: DevCredentials = DEFAULT_CREDENTIALS
) -> PhpResponse:
    """Load the login page, then post the dev credentials."""
    runner.request(PhpRequest(url=LOGIN_URL))
    response = runner.request(
        PhpRequest(url=LOGIN_URL, method="POST", form_data=login_form(credentials))
    )
    logger.info("Logged in as %r", credentials.username)
    return response
