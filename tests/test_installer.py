"""
Tests for the install and login request sequence.
"""

from wpnow.adapters.base import PhpResponse
from wpnow.adapters.mock import MockRuntime
from wpnow.core.models.install import DevCredentials
from wpnow.core.services.installer import auto_login, register_user


class TestRegisterUser:
    """Tests for admin user registration."""

    def test_posts_install_form(self):
        php = MockRuntime()
        register_user(php)
        (req,) = php.requests
        assert req.method == "POST"
        assert req.url == "/wp-admin/install.php?step=2"
        assert req.form_data["weblog_title"] == "My WordPress Website"
        assert req.form_data["admin_email"] == "admin@localhost.com"

    def test_returns_response_unchecked(self):
        php = MockRuntime()
        php.set_response("POST", "/wp-admin/install.php?step=2", PhpResponse(status=500))
        assert register_user(php).status == 500


class TestAutoLogin:
    """Tests for the auto-login step."""

    def test_get_then_post(self):
        php = MockRuntime()
        auto_login(php)
        assert [(r.method, r.url) for r in php.requests] == [
            ("GET", "/wp-login.php"),
            ("POST", "/wp-login.php"),
        ]
        assert php.requests[0].form_data is None
        assert php.requests[1].form_data == {
            "log": "admin",
            "pwd": "password",
            "rememberme": "forever",
        }

    def test_custom_credentials(self):
        php = MockRuntime()
        auto_login(php, DevCredentials(username="editor", password="pw"))
        assert php.requests[1].form_data["log"] == "editor"
