"""
Tests for the translation dictionaries
"""

import dataclasses
import json

import pytest

from bilang.app.exceptions import DictionaryError
from bilang.app.i18n.dictionary import Dictionaries, load_dictionaries


class TestPackagedDictionaries:
    """The tables shipped with the package"""

    def test_interface_entries(self, dictionaries):
        assert dictionaries.lookup("ui", "INÍCIO") == "HOME"
        assert dictionaries.lookup("ui", "Buscar...") == "Search..."
        assert dictionaries.lookup("ui", "Etiquetas em alta") == "Trending Tags"
        assert dictionaries.lookup("tags", "observabilidade") == "observability"

    def test_lookup_strips_whitespace(self, dictionaries):
        assert dictionaries.lookup("ui", "  SOBRE\n") == "ABOUT"

    def test_no_identity_entries(self, dictionaries):
        for name in ("ui", "tags", "titles", "descriptions", "links"):
            for source, target in dictionaries.table(name).items():
                assert source != target, f"{name}: {source!r}"

    def test_links_come_from_route_table(self, dictionaries, route_map):
        assert dict(dictionaries.links) == dict(route_map.pairs)

    def test_unknown_table(self, dictionaries):
        with pytest.raises(DictionaryError):
            dictionaries.table("menus")


class TestImmutability:
    """Dictionaries cannot be changed after construction"""

    def test_tables_are_read_only(self):
        source = {"SOBRE": "ABOUT"}
        dictionaries = Dictionaries(ui=source)

        with pytest.raises(TypeError):
            dictionaries.ui["SOBRE"] = "X"

        # Mutating the input does not leak in
        source["SOBRE"] = "changed"
        assert dictionaries.lookup("ui", "SOBRE") == "ABOUT"

    def test_fields_cannot_be_reassigned(self):
        dictionaries = Dictionaries()
        with pytest.raises(dataclasses.FrozenInstanceError):
            dictionaries.ui = {}

    def test_instances_are_independent(self):
        first = load_dictionaries()
        second = load_dictionaries()
        assert first is not second
        assert first.ui is not second.ui


class TestPhrases:
    """Ordered substring fallback"""

    def test_every_occurrence_replaced(self):
        dictionaries = Dictionaries(phrases=(("usando", "using"),))
        assert dictionaries.translate_phrases("usando Go, usando Rust") == "using Go, using Rust"

    def test_first_listed_wins_on_overlap(self):
        short_first = Dictionaries(phrases=(("ab", "Y"), ("abc", "X")))
        long_first = Dictionaries(phrases=(("abc", "X"), ("ab", "Y")))

        assert short_first.translate_phrases("abc") == "Yc"
        assert long_first.translate_phrases("abc") == "X"

    def test_no_match_is_none(self, dictionaries):
        assert dictionaries.translate_phrases("Notas sobre Rust") is None

    def test_packaged_phrases(self, dictionaries):
        assert dictionaries.translate_phrases("Guerra dos Deploys em 2025") == "Deploy Wars em 2025"


class TestLoading:

    def test_custom_file(self, tmp_path):
        path = tmp_path / "dictionary.json"
        path.write_text(json.dumps({
            "ui": {"Olá": "Hello"},
            "links": {"/a/": "/en/a/"},
            "phrases": [["bom", "good"]],
        }), encoding="utf-8")

        dictionaries = load_dictionaries(path)
        assert dictionaries.lookup("ui", "Olá") == "Hello"
        assert dictionaries.lookup("links", "/a/") == "/en/a/"
        assert dictionaries.tags == {}
        assert dictionaries.phrases == (("bom", "good"),)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DictionaryError):
            load_dictionaries(tmp_path / "missing.json")

    def test_table_must_be_object(self, tmp_path):
        path = tmp_path / "dictionary.json"
        path.write_text(json.dumps({"ui": ["INÍCIO", "HOME"]}), encoding="utf-8")
        with pytest.raises(DictionaryError):
            load_dictionaries(path)

    def test_malformed_phrase(self, tmp_path):
        path = tmp_path / "dictionary.json"
        path.write_text(json.dumps({"phrases": [["only one"]]}), encoding="utf-8")
        with pytest.raises(DictionaryError):
            load_dictionaries(path)
