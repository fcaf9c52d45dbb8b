"""Tests for src/phpext_mcp/models.py."""

import pytest
from pydantic import ValidationError

from phpext_mcp.models import ExtensionInfo, FrameworkPreset


def _record(**overrides):
    data = {
        "name": "sample",
        "displayName": "Sample",
        "description": "Sample extension",
        "category": "Testing",
        "icon": "*",
        "useCase": ["Unit tests"],
        "frameworks": ["All"],
        "phpVersions": "PHP 8.0+",
        "performance": "low",
        "security": "safe",
        "size": "small",
        "popularity": 5,
        "documentation": "https://example.com/sample",
    }
    data.update(overrides)
    return ExtensionInfo(**data)


def test_aliases_and_defaults():
    """camelCase input populates snake_case attributes; lists become tuples."""
    ext = _record()
    assert ext.display_name == "Sample"
    assert ext.use_case == ("Unit tests",)
    assert ext.php_versions == "PHP 8.0+"
    assert ext.dependencies == ()
    assert ext.conflicts == ()
    assert ext.examples == ()
    assert ext.tips == ()


def test_field_names_accepted():
    ext = ExtensionInfo(
        name="sample",
        display_name="Sample",
        description="d",
        category="c",
        icon="*",
        use_case=(),
        frameworks=(),
        php_versions="PHP 8.0+",
        performance="high",
        security="risk",
        size="large",
        popularity=1,
        documentation="https://example.com",
    )
    assert ext.display_name == "Sample"


@pytest.mark.parametrize("popularity", [0, 11, -1])
def test_popularity_out_of_range(popularity):
    with pytest.raises(ValidationError):
        _record(popularity=popularity)


@pytest.mark.parametrize(
    ("field", "value"),
    [("performance", "extreme"), ("security", "unknown"), ("size", "huge")],
)
def test_enum_rejected(field, value):
    with pytest.raises(ValidationError):
        _record(**{field: value})


def test_to_dict_uses_camel_case(curl):
    data = curl.to_dict()
    assert data["displayName"] == "cURL"
    assert data["phpVersions"] == "PHP 5.0+"
    assert data["useCase"][0] == "Making HTTP/HTTPS requests to APIs"
    assert isinstance(data["frameworks"], list)
    assert "display_name" not in data


def test_records_compare_by_value():
    assert _record() == _record()
    assert _record() != _record(popularity=6)


def test_preset_validation():
    with pytest.raises(ValidationError):
        FrameworkPreset(
            name="Bad",
            description="d",
            icon="*",
            category="c",
            extensions=(),
            settings={},
            performance="low",
            security="strict",
        )


def test_preset_to_dict():
    preset = FrameworkPreset(
        name="Tiny",
        description="d",
        icon="*",
        category="c",
        extensions=("curl",),
        settings={"memory_limit": "64M", "max_execution_time": 30},
        performance="medium",
        security="permissive",
    )
    assert preset.to_dict() == {
        "name": "Tiny",
        "description": "d",
        "icon": "*",
        "category": "c",
        "extensions": ["curl"],
        "settings": {"memory_limit": "64M", "max_execution_time": 30},
        "recommendations": [],
        "performance": "medium",
        "security": "permissive",
    }
