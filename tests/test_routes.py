"""
Tests for the bidirectional route table
"""

import json

import pytest

from bilang.app.exceptions import DictionaryError
from bilang.app.i18n.routes import RouteMap
from bilang.app.lang.state import Locale


class TestRouteMap:

    def test_packaged_table_loads(self, route_map):
        assert len(route_map) == 5
        assert "/exemplo-traducao-post/" in route_map
        assert "/en/example-translation-post/" in route_map

    def test_symmetry_for_every_pair(self, route_map):
        for primary_path, secondary_path in route_map.pairs:
            assert route_map.translate(primary_path, Locale.SECONDARY) == secondary_path
            assert route_map.translate(secondary_path, Locale.PRIMARY) == primary_path

    def test_same_side_returns_itself(self, route_map):
        for primary_path, secondary_path in route_map.pairs:
            assert route_map.translate(primary_path, Locale.PRIMARY) == primary_path
            assert route_map.translate(secondary_path, Locale.SECONDARY) == secondary_path

    def test_unknown_path_is_absent_both_ways(self, route_map):
        for path in ("/", "/about/", "/en/", "/exemplo-traducao-post", "/en/unknown/"):
            assert route_map.translate(path, Locale.SECONDARY) is None
            assert route_map.translate(path, Locale.PRIMARY) is None

    def test_duplicate_paths_rejected(self):
        with pytest.raises(DictionaryError):
            RouteMap([("/a/", "/en/a/"), ("/a/", "/en/b/")])
        with pytest.raises(DictionaryError):
            RouteMap([("/a/", "/en/a/"), ("/b/", "/en/a/")])

    def test_load_custom_file(self, tmp_path):
        path = tmp_path / "routes.json"
        path.write_text(json.dumps({"routes": [["/oi/", "/en/hi/"]]}), encoding="utf-8")

        route_map = RouteMap.load(path)
        assert route_map.translate("/oi/", Locale.SECONDARY) == "/en/hi/"

    def test_load_plain_list(self, tmp_path):
        path = tmp_path / "routes.json"
        path.write_text(json.dumps([["/oi/", "/en/hi/"]]), encoding="utf-8")
        assert len(RouteMap.load(path)) == 1

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "routes.json"
        path.write_text(json.dumps({"routes": [["/only-one/"]]}), encoding="utf-8")
        with pytest.raises(DictionaryError):
            RouteMap.load(path)

        path.write_text("nope", encoding="utf-8")
        with pytest.raises(DictionaryError):
            RouteMap.load(path)
