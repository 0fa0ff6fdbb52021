"""Tests for the i18n loader."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from gamelog.utils.i18n import I18n, init_i18n, t


class TestI18n:
    def test_english_lookup(self) -> None:
        assert I18n("en").t("artwork.slot_names.hero") == "Hero banner"

    def test_german_lookup(self) -> None:
        assert I18n("de").t("artwork.slot_names.box_art") == "Cover"

    def test_shared_log_keys_available_in_every_locale(self) -> None:
        assert I18n("de").t("logs.artwork.skipped", name="a.txt") == "Skipped: a.txt"

    def test_unknown_locale_falls_back_to_english(self) -> None:
        assert I18n("xx").t("artwork.slot_names.hero") == "Hero banner"

    def test_missing_key(self) -> None:
        assert I18n("en").t("artwork.nope") == "[artwork.nope]"

    def test_branch_key_is_missing(self) -> None:
        assert I18n("en").t("artwork.slot_names") == "[artwork.slot_names]"

    def test_interpolation(self) -> None:
        assert I18n("en").t("store.add_custom", name="Zavvi") == 'Add custom: "Zavvi"'

    def test_bad_interpolation_returns_template(self) -> None:
        assert I18n("en").t("store.add_custom") == 'Add custom: "{name}"'
        assert I18n("en").t("store.add_custom", other="x") == 'Add custom: "{name}"'

    def test_german_falls_back_to_english_per_key(self, tmp_path: Path) -> None:
        (tmp_path / "i18n" / "en").mkdir(parents=True)
        (tmp_path / "i18n" / "de").mkdir()
        (tmp_path / "i18n" / "en" / "a.json").write_text(
            json.dumps({"slot": {"hero": "Hero banner", "logo": "Logo"}}), encoding="utf-8"
        )
        (tmp_path / "i18n" / "de" / "a.json").write_text(json.dumps({"slot": {"hero": "Hero-Banner"}}), encoding="utf-8")
        (tmp_path / "i18n" / "broken.json").write_text("{not json", encoding="utf-8")

        with patch("gamelog.utils.paths.get_resources_dir", return_value=tmp_path):
            i18n = I18n("de")

        assert i18n.t("slot.hero") == "Hero-Banner"
        assert i18n.t("slot.logo") == "Logo"


class TestGlobalInstance:
    def test_init_switches_language(self) -> None:
        assert init_i18n("de").locale == "de"
        assert t("artwork.slot_names.hero") == "Hero-Banner"
        init_i18n("en")
        assert t("artwork.slot_names.hero") == "Hero banner"
