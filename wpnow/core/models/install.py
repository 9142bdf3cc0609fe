"""
Install and login payloads for the throwaway local site.

These credentials are hard-coded on purpose: wp-now only ever installs
into an ephemeral, local-only WordPress. Never point this sequence at
a reachable host.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

INSTALL_URL = "/wp-admin/install.php?step=2"
LOGIN_URL = "/wp-login.php"

SITE_TITLE = "My WordPress Website"
SITE_LOCALE = "en"
TABLE_PREFIX = "wp_"


class DevCredentials(BaseModel):
    """Admin account created on every fresh install."""

    model_config = ConfigDict(frozen=True)

    username: str = "admin"
    password: str = "password"
    email: str = "admin@localhost.com"


DEFAULT_CREDENTIALS = DevCredentials()


def install_form(credentials: DevCredentials = DEFAULT_CREDENTIALS) -> dict[str, str]:
    """Form body for step 2 of ``wp-admin/install.php``."""
    return {
        "language": SITE_LOCALE,
        "prefix": TABLE_PREFIX,
        "weblog_title": SITE_TITLE,
        "user_name": credentials.username,
        "admin_password": credentials.password,
        "admin_password2": credentials.password,
        "Submit": "Install WordPress",
        "pw_weak": "1",
        "admin_email": credentials.email,
    }


def login_form(credentials: DevCredentials = DEFAULT_CREDENTIALS) -> dict[str, str]:
    return {
        "log": credentials.username,
        "pwd": credentials.password,
        "rememberme": "forever",
    }
