from datetime import date, datetime

import pytest

from daycare.services.ratio_engine import (
    DEFAULT_RATIOS,
    NO_CONSTRAINT,
    ChildRatioInput,
    EffectiveRatio,
    RatioGroup,
    StatusIndicator,
    calculate_age_in_months,
    calculate_ratio_status,
    classify_ratio_group,
    count_by_group,
    effective_ratio,
    format_ratio,
    ratio_label,
    required_ratio,
    status_color,
    status_indicator,
)


def kid(age, kindergarten=False, child_id="c"):
    return ChildRatioInput(
        child_id=child_id,
        first_name="Test",
        last_name="Child",
        age_in_months=age,
        is_kindergarten_enrolled=kindergarten,
    )


# -------------------------
# Age
# -------------------------
def test_age_counts_whole_months_only():
    assert calculate_age_in_months(date(2024, 1, 15), date(2024, 3, 14)) == 1
    assert calculate_age_in_months(date(2024, 1, 15), date(2024, 3, 15)) == 2


def test_age_across_year_boundary():
    assert calculate_age_in_months(date(2023, 11, 30), date(2024, 2, 1)) == 2


def test_age_accepts_datetimes():
    assert calculate_age_in_months(datetime(2022, 5, 1, 8, 0), datetime(2024, 5, 1, 7, 0)) == 24


def test_age_never_negative_for_future_birth_date():
    assert calculate_age_in_months(date(2030, 1, 1), date(2024, 1, 1)) == 0


def test_age_unknown_birth_date():
    assert calculate_age_in_months(None, date(2024, 1, 1)) is None


# -------------------------
# Classification
# -------------------------
@pytest.mark.parametrize(
    "age, expected",
    [
        (0, RatioGroup.INFANT),
        (11, RatioGroup.INFANT),
        (18, RatioGroup.INFANT),
        (19, RatioGroup.TODDLER),
        (35, RatioGroup.TODDLER),
        (36, RatioGroup.PRESCHOOL),
        (47, RatioGroup.PRESCHOOL),
        (48, RatioGroup.PRE_K),
        (59, RatioGroup.PRE_K),
        (60, RatioGroup.KINDERGARTEN),
        (100, RatioGroup.KINDERGARTEN),
    ],
)
def test_band_boundaries(age, expected):
    assert classify_ratio_group(age) == expected


def test_kindergarten_flag_wins_over_age():
    assert classify_ratio_group(20, is_kindergarten_enrolled=True) == RatioGroup.KINDERGARTEN
    assert classify_ratio_group(None, is_kindergarten_enrolled=True) == RatioGroup.KINDERGARTEN


def test_unknown_age_is_unclassified():
    assert classify_ratio_group(None) is None


# -------------------------
# Effective ratio
# -------------------------
def test_empty_room_has_no_constraint():
    eff = effective_ratio([])
    assert eff == NO_CONSTRAINT
    assert eff.is_unconstrained


def test_unclassified_children_only_has_no_constraint():
    assert effective_ratio([kid(None), kid(None)]) == NO_CONSTRAINT


def test_single_group_uses_its_ratio():
    for group, lower in [(RatioGroup.TODDLER, 19), (RatioGroup.PRE_K, 48)]:
        eff = effective_ratio([kid(lower)])
        assert eff == EffectiveRatio(DEFAULT_RATIOS[group], group)


def test_mixed_room_takes_strictest_group():
    eff = effective_ratio([kid(50), kid(50), kid(50), kid(10)])
    assert eff.effective_ratio == 4
    assert eff.dominant_group == RatioGroup.INFANT


def test_effective_ratio_ignores_order_and_headcount():
    a = [kid(40), kid(20), kid(65)]
    b = [kid(20), kid(65), kid(40), kid(40), kid(40)]
    assert effective_ratio(a) == effective_ratio(b)


def test_adding_a_stricter_child_never_loosens_ratio():
    room = [kid(50), kid(40)]
    before = effective_ratio(room).effective_ratio
    after = effective_ratio(room + [kid(25)]).effective_ratio
    assert after <= before


def test_tie_goes_to_younger_group():
    ratios = {RatioGroup.TODDLER: 6, RatioGroup.PRESCHOOL: 6}
    eff = effective_ratio([kid(40), kid(20)], ratios)
    assert eff == EffectiveRatio(6, RatioGroup.TODDLER)


def test_custom_table_missing_group_falls_back_to_default():
    ratios = {RatioGroup.INFANT: 3}
    assert required_ratio(RatioGroup.PRE_K, ratios) == DEFAULT_RATIOS[RatioGroup.PRE_K]
    assert required_ratio(RatioGroup.INFANT, ratios) == 3


# -------------------------
# Ratio status
# -------------------------
def test_status_with_custom_table():
    ratios = {RatioGroup.INFANT: 3, RatioGroup.TODDLER: 5, RatioGroup.PRESCHOOL: 8}
    status = calculate_ratio_status(2, [kid(10), kid(20)], ratios)
    assert status.required_ratio == 3
    assert status.max_allowed_children == 6
    assert status.is_over_ratio is False
    assert status.status_indicator == StatusIndicator.GOOD


def test_at_capacity_is_warning():
    status = calculate_ratio_status(1, [kid(10)] * 4)
    assert status.max_allowed_children == 4
    assert not status.is_over_ratio
    assert status.status_indicator == StatusIndicator.WARNING


def test_over_capacity_is_critical():
    status = calculate_ratio_status(1, [kid(10)] * 5)
    assert status.is_over_ratio
    assert status.status_indicator == StatusIndicator.CRITICAL
    assert status.actual_ratio == 5.0


def test_zero_staff_with_children_is_over_ratio():
    status = calculate_ratio_status(0, [kid(50)])
    assert status.is_over_ratio
    assert status.max_allowed_children == 0
    assert status.actual_ratio == 1.0
    assert status.status_indicator == StatusIndicator.CRITICAL


def test_zero_staff_with_only_unclassified_children_is_still_over():
    status = calculate_ratio_status(0, [kid(None)])
    assert status.required_ratio is None
    assert status.is_over_ratio


def test_empty_room_is_good():
    status = calculate_ratio_status(0, [])
    assert not status.is_over_ratio
    assert status.required_ratio is None
    assert status.max_allowed_children is None
    assert status.actual_ratio == 0.0
    assert status.status_indicator == StatusIndicator.GOOD


def test_unclassified_children_count_toward_headcount():
    status = calculate_ratio_status(1, [kid(50), kid(None)])
    assert status.children_count == 2
    assert status.unclassified_count == 1
    assert status.required_ratio == 10


def test_actual_ratio_rounds_to_two_places():
    status = calculate_ratio_status(3, [kid(50)] * 10)
    assert status.actual_ratio == 3.33


def test_negative_staff_rejected():
    with pytest.raises(ValueError):
        calculate_ratio_status(-1, [])


def test_count_by_group_is_ordered_youngest_first():
    counts = count_by_group([kid(50), kid(10), kid(50), kid(None)])
    assert [(c.group, c.count) for c in counts] == [(RatioGroup.INFANT, 1), (RatioGroup.PRE_K, 2)]


def test_status_indicator_function_matches_property():
    status = calculate_ratio_status(2, [kid(20)] * 12)
    assert status_indicator(status) == status.status_indicator == StatusIndicator.WARNING


# -------------------------
# Display helpers
# -------------------------
def test_format_ratio():
    assert format_ratio(4) == "1:4"
    assert format_ratio(None) == "no limit"


def test_ratio_label_includes_ratio():
    assert ratio_label(RatioGroup.INFANT).endswith("(1:4)")


def test_status_colors():
    assert status_color(StatusIndicator.GOOD) == "#27AE60"
    assert status_color("critical") == "#E74C3C"
    assert status_color("bogus") == "#95A5A6"
