# -*- coding: utf-8 -*-
"""
Unit Tests for settings persistence and the engine registry
"""

import json

import resxsync_config as config
from core.plugin_manager import PluginManager
from plugins.built_in.dummy_engine import DummyEngine
from resxsync_settings import (
    evaluation_config_from_settings, get_default_settings, load_settings, save_settings,
)


class TestSettings:
    """Tests for load_settings/save_settings."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "settings.json") == get_default_settings()

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        settings = get_default_settings()
        settings["translatable_in_brackets"] = True
        settings["enabled_languages"] = ["de", "fr-FR"]

        assert save_settings(settings, path)
        assert load_settings(path) == settings

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == get_default_settings()

    def test_invalid_values_reset(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"batch_size": 0, "batch_delay": "slow",
                                    "comments_in_all_languages": "yes", "default_language": "de"}),
                        encoding="utf-8")

        settings = load_settings(path)

        assert settings["batch_size"] == config.TRANSLATE_BATCH_SIZE
        assert settings["batch_delay"] == config.TRANSLATE_BATCH_DELAY
        assert settings["comments_in_all_languages"] is False
        assert settings["default_language"] == "de"

    def test_display_filter_flags(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"hide_empty_resources": True, "hide_nontranslated_resources": 1}),
                        encoding="utf-8")

        settings = load_settings(path)

        assert settings["hide_empty_resources"] is True
        assert settings["hide_nontranslated_resources"] is False

    def test_evaluation_config(self):
        settings = get_default_settings()
        assert not evaluation_config_from_settings(settings).translatable_in_brackets
        settings["translatable_in_brackets"] = True
        assert evaluation_config_from_settings(settings).is_translatable("[x]")
        assert not evaluation_config_from_settings(settings).is_translatable("x")


class TestPluginManager:
    """Tests for the engine registry."""

    def test_built_ins_registered(self):
        manager = PluginManager()
        assert {e.id for e in manager.get_all_engines()} == {
            "resxsync.engine.google_free", "resxsync.engine.dummy"}

    def test_duplicate_rejected(self):
        manager = PluginManager(register_built_ins=False)
        assert manager.register_engine(DummyEngine())
        assert not manager.register_engine(DummyEngine())

    def test_active_engine_fallback(self):
        manager = PluginManager()
        assert manager.get_active_engine({"active_engine": "missing"}).id == "resxsync.engine.dummy"
        assert manager.get_active_engine(get_default_settings()).id == config.DEFAULT_ENGINE_ID

    def test_dummy_engine_prefixes(self):
        results = DummyEngine(prefix="> ").translate_batch(["a", "b"], "en", "de")
        assert [r.translated_text for r in results] == ["> a", "> b"]
