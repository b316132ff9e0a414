from __future__ import annotations

import pytest

from guild_build import levels


@pytest.mark.parametrize("scheme", levels.LEVEL_SCHEMES)
def test_shipped_schemes_have_four_distinct_levels(scheme):
    assert len(scheme.levels) == 4
    assert levels.validate_levels(scheme.levels) == []


@pytest.mark.parametrize("name", ["numbered", "NUMBERED", " Named "])
def test_get_level_scheme_is_case_insensitive(name):
    assert levels.get_level_scheme(name) in levels.LEVEL_SCHEMES


def test_get_level_scheme_rejects_unknown():
    with pytest.raises(ValueError):
        levels.get_level_scheme("roman")


def test_detect_level_scheme_ignores_order():
    assert levels.detect_level_scheme(["principal", "entry", "senior", "mid"]) is levels.SCHEME_NAMED
    assert levels.detect_level_scheme(["level_1", "level_2"]) is None


def test_custom_level_scheme_validates():
    scheme = levels.custom_level_scheme(["novice", "adept"])
    assert scheme.name == "CUSTOM"
    assert tuple(scheme.levels) == ("novice", "adept")

    with pytest.raises(ValueError):
        levels.custom_level_scheme([])
    with pytest.raises(ValueError):
        levels.custom_level_scheme(["novice", " "])
