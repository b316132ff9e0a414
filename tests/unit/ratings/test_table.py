import pytest

from guild_build.errors import InvalidSelection, MissingRatingData, RatingTableError
from guild_build.ratings import RatingTable, validate_rating_table


LEVELS = ["level_1", "level_2", "level_3", "level_4"]


def _uniform(skills, base=10):
    return {lvl: {s: base + i for s in skills} for i, lvl in enumerate(LEVELS)}


def test_validate_reports_no_issues_for_uniform_table():
    data = {"Knight": _uniform(["sword", "shield"]), "Mage": _uniform(["sword", "shield"])}
    assert validate_rating_table(data=data, levels=LEVELS) == []


def test_validate_reports_missing_and_unexpected_levels():
    knight = _uniform(["sword"])
    del knight["level_4"]
    knight["level_9"] = {"sword": 1}

    issues = validate_rating_table(data={"Knight": knight}, levels=LEVELS)

    assert "Knight: missing levels ['level_4']" in issues
    assert "Knight: unexpected levels ['level_9']" in issues


def test_validate_reports_skill_drift_within_and_across_roles():
    knight = _uniform(["sword", "shield"])
    knight["level_3"] = {"sword": 5}
    mage = _uniform(["staff", "shield"])

    issues = validate_rating_table(data={"Knight": knight, "Mage": mage}, levels=LEVELS)

    assert any(i.startswith("Knight/level_3: skills differ from level_1") and "missing ['shield']" in i for i in issues)
    assert any(i.startswith("Mage: skills differ from Knight") for i in issues)


def test_validate_reports_empty_table():
    assert validate_rating_table(data={}, levels=LEVELS) == ["rating table has no roles"]


def test_from_mapping_strict_raises_with_all_issues():
    knight = _uniform(["sword"])
    del knight["level_2"]

    with pytest.raises(RatingTableError) as exc:
        RatingTable.from_mapping({"Knight": knight}, levels=LEVELS)

    assert exc.value.issues == ("Knight: missing levels ['level_2']",)
    assert "missing levels" in str(exc.value)


def test_from_mapping_non_strict_keeps_issues_and_logs():
    knight = _uniform(["sword"])
    del knight["level_2"]
    logs = []

    table = RatingTable.from_mapping({"Knight": knight}, levels=LEVELS, strict=False, logger=logs.append)

    assert table.issues == ("Knight: missing levels ['level_2']",)
    assert any("missing levels" in line for line in logs)
    with pytest.raises(MissingRatingData):
        table.rating("Knight", "level_2", "sword")


@pytest.mark.parametrize(
    "data",
    [
        {"Knight": {"level_1": {"sword": "ten"}}},
        {"Knight": {"level_1": {"sword": True}}},
        {"Knight": {"level_1": ["sword"]}},
        {"Knight": ["level_1"]},
        {"": {"level_1": {"sword": 1}}},
    ],
)
def test_from_mapping_rejects_malformed_structure(data):
    with pytest.raises(RatingTableError):
        RatingTable.from_mapping(data, levels=["level_1"])


def test_table_is_read_only_and_ordered():
    data = {
        "Mage": _uniform(["staff"]),
        "Knight": {lvl: {"staff": 1} for lvl in reversed(LEVELS)},
    }

    table = RatingTable.from_mapping(data, levels=LEVELS)

    assert table.roles == ("Mage", "Knight")
    assert table.levels == tuple(LEVELS)
    assert list(table.as_dict()["Knight"]) == LEVELS
    with pytest.raises(TypeError):
        table.ratings_for("Mage", "level_1")["staff"] = 99  # type: ignore[index]


def test_lookups_distinguish_invalid_selection_from_missing_data(sample_table):
    assert sample_table.rating("Software Engineer", "level_1", "Python") == 45.0

    with pytest.raises(InvalidSelection):
        sample_table.rating("Wizard", "level_1", "Python")
    with pytest.raises(InvalidSelection):
        sample_table.rating("Software Engineer", "level_5", "Python")
    with pytest.raises(MissingRatingData):
        sample_table.rating("Software Engineer", "level_1", "Alchemy")


def test_skill_universe_and_membership(sample_table):
    assert "Python" in sample_table.skill_universe
    assert len(sample_table.skill_universe) == 8
    assert "Data Scientist" in sample_table
    assert "Wizard" not in sample_table
    assert len(sample_table) == 4
