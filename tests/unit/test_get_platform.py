"""Unit tests for get_platform module."""

import os
from unittest.mock import patch

import pytest

from schooldesk.lib.get_platform import get_data_directory, get_platform


class TestGetPlatform:
    """Tests for the get_platform function."""

    @pytest.mark.parametrize(
        "sys_platform,expected",
        [("darwin", "osx"), ("linux", "linux"), ("win32", "windows"), ("sunos5", "unknown")],
    )
    def test_platforms(self, sys_platform, expected):
        """Test mapping of sys.platform values."""
        with patch("sys.platform", sys_platform):
            assert get_platform() == expected


class TestGetDataDirectory:
    """Tests for the get_data_directory function."""

    def test_linux_creates_dot_directory(self, tmp_path):
        """Test the hidden data folder is created under the home directory."""
        with (
            patch("schooldesk.lib.get_platform.get_platform", return_value="linux"),
            patch("os.path.expanduser", side_effect=lambda p: p.replace("~", str(tmp_path))),
        ):
            path = get_data_directory()

        assert path == os.path.join(str(tmp_path), ".schooldesk")
        assert os.path.isdir(path)

    def test_windows_uses_appdata(self, tmp_path):
        """Test the data folder lives in APPDATA on Windows."""
        with (
            patch("schooldesk.lib.get_platform.get_platform", return_value="windows"),
            patch.dict(os.environ, {"APPDATA": str(tmp_path)}),
        ):
            path = get_data_directory()

        assert path == os.path.join(str(tmp_path), "schooldesk")
        assert os.path.isdir(path)
