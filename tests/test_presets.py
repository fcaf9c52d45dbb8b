"""Tests for src/phpext_mcp/presets.py."""

import pytest

from phpext_mcp.catalog import EXTENSION_DATABASE
from phpext_mcp.presets import (
    DETECTION_RULES,
    FRAMEWORK_PRESETS,
    detect_frameworks,
    get_preset,
    list_presets,
    resolve_preset_extensions,
)


def test_list_presets():
    assert list_presets() == [
        "laravel",
        "wordpress",
        "codeigniter",
        "symfony",
        "drupal",
        "magento",
        "development",
        "production",
    ]


@pytest.mark.parametrize("key", ["laravel", "Laravel", "LARAVEL"])
def test_get_preset_case_insensitive(key):
    preset = get_preset(key)
    assert preset is not None
    assert preset.name == "Laravel"


def test_get_preset_unknown():
    assert get_preset("rails") is None


def test_preset_settings_keep_value_types():
    settings = FRAMEWORK_PRESETS["production"].settings
    assert settings["opcache.validate_timestamps"] == 0
    assert settings["expose_php"] == "Off"
    assert FRAMEWORK_PRESETS["development"].settings["xdebug.client_port"] == 9003


def test_development_includes_xdebug():
    assert "xdebug" in FRAMEWORK_PRESETS["development"].extensions
    assert "xdebug" not in FRAMEWORK_PRESETS["production"].extensions


def test_resolve_laravel():
    found, missing = resolve_preset_extensions("laravel")
    assert [ext.name for ext in found] == [
        "curl",
        "mbstring",
        "openssl",
        "pdo",
        "zip",
        "gd",
        "redis",
        "opcache",
    ]
    assert missing == [
        "pdo_mysql",
        "pdo_sqlite",
        "pdo_pgsql",
        "tokenizer",
        "xml",
        "json",
        "fileinfo",
        "bcmath",
        "intl",
        "memcached",
    ]


def test_resolve_covers_every_extension():
    for key, preset in FRAMEWORK_PRESETS.items():
        found, missing = resolve_preset_extensions(key)
        assert len(found) + len(missing) == len(preset.extensions)
        assert all(ext is EXTENSION_DATABASE[ext.name] for ext in found)


def test_resolve_unknown_preset():
    assert resolve_preset_extensions("rails") == ([], [])


def test_preset_settings_are_read_only():
    preset = get_preset("laravel")
    with pytest.raises(TypeError):
        preset.settings["memory_limit"] = "1G"
    assert FRAMEWORK_PRESETS["laravel"].settings["memory_limit"] == "512M"


def _touch(root, *paths):
    """Create files, or directories for paths ending in a slash."""
    for rel in paths:
        target = root / rel
        if rel.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.touch()


class TestDetectFrameworks:
    def test_laravel_project(self, tmp_path):
        _touch(tmp_path, "artisan", "composer.json", "config/app.php")
        assert detect_frameworks(tmp_path) == ["laravel"]

    def test_below_threshold(self, tmp_path):
        # 2 of 5 Laravel signatures; 3 are required
        _touch(tmp_path, "artisan", "config/app.php")
        assert detect_frameworks(tmp_path) == []

    def test_wordpress_directories(self, tmp_path):
        _touch(tmp_path, "wp-config.php", "wp-content/", "wp-admin/")
        assert detect_frameworks(tmp_path) == ["wordpress"]

    def test_codeigniter_rounds_threshold_up(self, tmp_path):
        # 4 signatures * 0.6 = 2.4, so 3 are needed
        _touch(tmp_path, "index.php", "composer.json")
        assert "codeigniter" not in detect_frameworks(tmp_path)
        _touch(tmp_path, "system/CodeIgniter.php")
        assert "codeigniter" in detect_frameworks(tmp_path)

    def test_several_matches_keep_rule_order(self, tmp_path):
        _touch(
            tmp_path,
            "composer.json",
            "symfony.lock",
            "bin/console",
            "bin/magento",
            "pub/index.php",
        )
        assert detect_frameworks(str(tmp_path)) == ["symfony", "magento"]

    def test_missing_directory(self, tmp_path):
        assert detect_frameworks(tmp_path / "nope") == []

    def test_rules_name_existing_presets(self):
        assert set(DETECTION_RULES) <= set(FRAMEWORK_PRESETS)
