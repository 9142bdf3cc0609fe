"""
Tests for domain models — release registry, mounts, install payloads.
"""

import pytest

from wpnow.core.config.errors import UnknownReleaseError
from wpnow.core.models import (
    DEFAULT_CREDENTIALS,
    DevCredentials,
    MountMapping,
    MountRole,
    get_release,
    install_form,
    known_release_ids,
    list_releases,
    login_form,
)


class TestReleaseRegistry:
    """Tests for the known WordPress releases."""

    def test_known_ids_in_order(self):
        assert known_release_ids() == ["nightly", "beta", "6.6", "6.5", "6.4", "6.3"]

    def test_sizes(self):
        sizes = {r.identifier: r.expected_size for r in list_releases()}
        assert sizes == {
            "nightly": 18651516,
            "beta": 18381300,
            "6.6": 18382440,
            "6.5": 4887384,
            "6.4": 4774235,
            "6.3": 3595053,
        }

    def test_get_release(self):
        release = get_release("6.5")
        assert release.identifier == "6.5"
        assert release.url.endswith("wordpress-6.5.zip")

    def test_all_urls_are_https_zip(self):
        for release in list_releases():
            assert release.url.startswith("https://")
            assert release.url.endswith(".zip")

    def test_unknown(self):
        with pytest.raises(UnknownReleaseError) as exc:
            get_release("2.0")
        assert exc.value.identifier == "2.0"
        assert exc.value.known == tuple(known_release_ids())


class TestMountMapping:
    """Tests for mount mappings."""

    def test_str(self):
        m = MountMapping(source="/src", target="/var/www/html", role=MountRole.INDEX)
        assert str(m) == "/src → /var/www/html [index]"

    def test_frozen_and_hashable(self):
        m = MountMapping(source="/a", target="/b", role=MountRole.SQLITE)
        assert m == MountMapping(source="/a", target="/b", role="sqlite")
        assert len({m, m}) == 1


class TestInstallPayloads:
    """Tests for install request payloads."""

    def test_install_form(self):
        assert install_form() == {
            "language": "en",
            "prefix": "wp_",
            "weblog_title": "My WordPress Website",
            "user_name": "admin",
            "admin_password": "password",
            "admin_password2": "password",
            "Submit": "Install WordPress",
            "pw_weak": "1",
            "admin_email": "admin@localhost.com",
        }

    def test_login_form(self):
        assert login_form() == {"log": "admin", "pwd": "password", "rememberme": "forever"}

    def test_custom_credentials(self):
        creds = DevCredentials(username="dev", password="secret", email="dev@example.test")
        form = install_form(creds)
        assert form["user_name"] == "dev"
        assert form["admin_password2"] == "secret"
        assert login_form(creds)["pwd"] == "secret"

    def test_default_credentials(self):
        assert DEFAULT_CREDENTIALS.username == "admin"
