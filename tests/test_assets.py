"""Tests for static asset reading."""

import pytest

from rss_relay.services.assets import AssetNotFound, StaticAssets
from rss_relay.utils.paths import resolve_within


class TestStaticAssets:

    @pytest.fixture
    def assets(self, static_root):
        return StaticAssets(static_root)

    def test_reads_index(self, assets):
        contents, content_type = assets.read_index()
        assert b"relay" in contents
        assert content_type == "text/html"

    def test_reads_nested_file(self, assets):
        contents, content_type = assets.read("/css/site.css")
        assert contents == b"body { margin: 0; }"
        assert content_type == "text/css"

    def test_missing_file_names_request(self, assets):
        with pytest.raises(AssetNotFound) as excinfo:
            assets.read("/nonexistent.html")
        assert str(excinfo.value) == "404 : /nonexistent.html not found"

    def test_directory_is_not_served(self, assets):
        with pytest.raises(AssetNotFound):
            assets.read("/css")

    def test_traversal_outside_root_rejected(self, assets):
        with pytest.raises(AssetNotFound):
            assets.read("/../secret.txt")

    def test_unknown_extension_is_octet_stream(self, assets, static_root):
        (static_root / "blob.zzqx").write_bytes(b"\x00\x01")
        _, content_type = assets.read("/blob.zzqx")
        assert content_type == "application/octet-stream"


class TestResolveWithin:

    def test_inside(self, tmp_path):
        assert resolve_within(tmp_path, "/a/b.txt") == (tmp_path / "a" / "b.txt").resolve()

    def test_dot_segments_that_stay_inside(self, tmp_path):
        assert resolve_within(tmp_path, "a/../b.txt") == (tmp_path / "b.txt").resolve()

    @pytest.mark.parametrize("path", ["../etc/passwd", "/../../etc/passwd", "a/../../x"])
    def test_escapes(self, tmp_path, path):
        assert resolve_within(tmp_path / "root", path) is None

    def test_symlink_escape(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "outside.txt").write_text("x")
        (root / "link.txt").symlink_to(tmp_path / "outside.txt")
        assert resolve_within(root, "/link.txt") is None
