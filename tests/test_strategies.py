import pytest

from conftest import make_issue
from team_productivity.services.strategies import (
    APPENDIX_WEIGHT,
    LEGACY_CATEGORIZER,
    LEGACY_WEIGHT,
    MULTI_APPENDIX_WEIGHT,
    STORY_POINT_TYPE_CATEGORIZER,
    IssueCategory,
    parse_weight_label,
    resolve_strategies,
)


class TestWeightStrategySelection:
    def test_v3_wins_even_when_older_fields_present(self):
        issue = make_issue(
            customfield_11543=[{"value": "A1-High"}],
            customfield_11444={"value": "A2-Low"},
            customfield_11015={"id": "10650"},
        )
        strategies = resolve_strategies(issue)
        assert strategies.weight is MULTI_APPENDIX_WEIGHT
        assert strategies.weight.weight(issue) == 8

    def test_empty_v3_falls_back_to_v2(self):
        issue = make_issue(customfield_11543=[], customfield_11444={"value": "Medium"})
        strategies = resolve_strategies(issue)
        assert strategies.weight is APPENDIX_WEIGHT
        assert strategies.weight.weight(issue) == 4

    def test_no_versioned_fields_uses_legacy(self):
        issue = make_issue(customfield_11015={"id": "10653"})
        strategies = resolve_strategies(issue)
        assert strategies.weight is LEGACY_WEIGHT
        assert strategies.weight.weight(issue) == 8


class TestWeights:
    def test_v3_sums_all_selected_options(self):
        issue = make_issue(
            customfield_11543=[
                {"value": "Create endpoint-Very Low"},
                {"value": "Migration-Medium"},
                {"value": "Low"},
                {"value": ""},
                {"value": "Unrecognized"},
                None,
            ]
        )
        assert MULTI_APPENDIX_WEIGHT.weight(issue) == 1.5 + 4 + 2

    def test_v2_unmapped_label_defaults(self):
        issue = make_issue(customfield_11444={"value": "Something else"})
        assert APPENDIX_WEIGHT.weight(issue) == 1.5

    @pytest.mark.parametrize(
        "complexity,expected",
        [
            ({"id": "10650"}, 1.5),
            ({"id": "10651"}, 2),
            ({"id": 10652}, 4),
            ({"id": "10653"}, 8),
            ({"id": "99999"}, 1.5),
            (None, 1.5),
        ],
    )
    def test_legacy_complexity_ids(self, complexity, expected):
        issue = make_issue(customfield_11015=complexity)
        assert LEGACY_WEIGHT.weight(issue) == expected


class TestCategorization:
    def test_v2_story_point_type_takes_precedence(self):
        issue = make_issue(
            customfield_11312={"value": "Product"},
            customfield_10796={"value": "SP Tech Debt"},
        )
        categorizer = resolve_strategies(issue).categorizer
        assert categorizer is STORY_POINT_TYPE_CATEGORIZER
        assert categorizer.categorize(issue) is IssueCategory.PRODUCT

    def test_v2_other_value_is_tech_debt(self):
        issue = make_issue(customfield_11312={"value": "Tech Debt"})
        assert STORY_POINT_TYPE_CATEGORIZER.categorize(issue) is IssueCategory.TECH_DEBT

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("SP Product", IssueCategory.PRODUCT),
            ("SP Tech Debt", IssueCategory.TECH_DEBT),
            ("Product", IssueCategory.TECH_DEBT),
        ],
    )
    def test_legacy_categorization(self, value, expected):
        issue = make_issue(customfield_10796={"value": value})
        assert resolve_strategies(issue).categorizer is LEGACY_CATEGORIZER
        assert LEGACY_CATEGORIZER.categorize(issue) is expected

    def test_missing_categorization_is_tech_debt(self):
        assert LEGACY_CATEGORIZER.categorize(make_issue()) is IssueCategory.TECH_DEBT

    def test_category_names_matching_buckets(self):
        assert IssueCategory.PRODUCT.point_field == "product_point"
        assert IssueCategory.PRODUCT.weight_field == "weight_points_product"
        assert IssueCategory.TECH_DEBT.point_field == "tech_debt_point"
        assert IssueCategory.TECH_DEBT.weight_field == "weight_points_tech_debt"


@pytest.mark.parametrize(
    "label,expected",
    [
        ("Very Low", "Very Low"),
        ("Appendix 3 - Refactor-Very Low", "Very Low"),
        ("A1-Low", "Low"),
        ("Medium", "Medium"),
        ("High ", "High"),
        ("Highest", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_weight_label(label, expected):
    assert parse_weight_label(label) == expected
