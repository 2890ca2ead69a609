from __future__ import annotations

import json
from pathlib import Path

from ppe import config
from ppe.constants import DEFAULT_CATEGORIES, DEFAULT_LANG_KEYS, DEFAULT_TECHNOLOGIES


def test_defaults_when_no_files_exist(workdir: Path) -> None:
    main = config.load_main_config()
    assert main["language"] == "en"
    assert main["log_level"] == "INFO"

    vocabularies = config.load_vocabularies_config()
    assert vocabularies["categories"] == DEFAULT_CATEGORIES
    assert vocabularies["technologies"] == DEFAULT_TECHNOLOGIES

    assert config.load_profile_config()["name"] == "Jane Developer"


def test_main_config_merges_defaults(workdir: Path) -> None:
    (workdir / "config.json").write_text(json.dumps({"theme": "darkly"}), encoding="utf-8")

    main = config.load_main_config()

    assert main["theme"] == "darkly"
    assert main["language"] == "en"


def test_invalid_json_falls_back_to_defaults(workdir: Path) -> None:
    (workdir / "vocabularies.json").write_text("{not json", encoding="utf-8")

    assert config.load_vocabularies_config()["categories"] == DEFAULT_CATEGORIES


def test_vocabularies_are_cleaned(workdir: Path) -> None:
    (workdir / "vocabularies.json").write_text(
        json.dumps({"categories": ["Games", "Games", "", 3, "Tools"], "technologies": "React"}),
        encoding="utf-8",
    )

    vocabularies = config.load_vocabularies_config()

    assert vocabularies["categories"] == ["Games", "Tools"]
    assert vocabularies["technologies"] == DEFAULT_TECHNOLOGIES


def test_default_profile_is_not_shared_between_loads(workdir: Path) -> None:
    first = config.load_profile_config()
    first["projects"].clear()

    assert len(config.load_profile_config()["projects"]) == 2


def test_missing_language_falls_back_to_english_file(workdir: Path) -> None:
    lang_dir = workdir / "lang"
    lang_dir.mkdir()
    (lang_dir / "en.json").write_text(
        json.dumps({"language_name": "English", "title_required": "Please add a title"}),
        encoding="utf-8",
    )

    lang, warning, error = config.load_language_config("de")

    assert warning is not None and "'de'" in warning
    assert error is None
    assert lang["title_required"] == "Please add a title"
    assert lang["image_required"] == DEFAULT_LANG_KEYS["image_required"]


def test_no_language_files_use_built_in_strings(workdir: Path) -> None:
    lang, warning, error = config.load_language_config("en")

    assert warning is None
    assert error is not None
    assert lang == DEFAULT_LANG_KEYS
