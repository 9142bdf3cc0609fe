"""
Tests for the static-file classifier.
"""

import logging

from wpnow.adapters.mock import MockRuntime
from wpnow.core.services.static_files import is_static_file_path, seems_like_php_file

ROOT = "/var/www/html"


class TestSeemsLikePhp:
    """Tests for PHP path detection."""

    def test_php_suffix(self):
        assert seems_like_php_file("/index.php")

    def test_path_info(self):
        assert seems_like_php_file("/index.php/2024/hello")

    def test_not_php(self):
        assert not seems_like_php_file("/style.css")
        assert not seems_like_php_file("/php/readme.txt")


class TestIsStaticFilePath:
    """Tests for static file classification."""

    def _runtime(self) -> MockRuntime:
        php = MockRuntime()
        php.write_file(f"{ROOT}/style.css", "body{}")
        php.write_file(f"{ROOT}/index.php", "<?php")
        php.mkdir_tree(f"{ROOT}/wp-content/uploads")
        return php

    def test_existing_asset(self):
        assert is_static_file_path(self._runtime(), ROOT, "/style.css")

    def test_php_file(self):
        assert not is_static_file_path(self._runtime(), ROOT, "/index.php")

    def test_directory(self):
        assert not is_static_file_path(self._runtime(), ROOT, "/wp-content/uploads")

    def test_missing(self):
        assert not is_static_file_path(self._runtime(), ROOT, "/nope.js")

    def test_mounted_host_file(self, index_project):
        php = MockRuntime()
        php.mount(str(index_project), ROOT)
        assert is_static_file_path(php, ROOT, "/index.html")

    def test_bad_request_path_is_not_static(self, caplog):
        with caplog.at_level(logging.ERROR):
            assert not is_static_file_path(self._runtime(), ROOT, None)  # type: ignore[arg-type]
        assert "Static file check failed" in caplog.text

    def test_check_failure_is_logged_not_raised(self, caplog):
        php = self._runtime()
        php.set_failure("file_exists", OSError("disk gone"))
        with caplog.at_level(logging.ERROR):
            assert not is_static_file_path(php, ROOT, "/style.css")
        assert "Static file check failed" in caplog.text
        assert caplog.records[-1].exc_info is not None
