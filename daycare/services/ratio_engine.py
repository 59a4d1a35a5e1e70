"""
Staff-to-Child Ratio Engine

Classifies children into regulatory age bands, derives the binding
staff:child ratio for a mixed-age room, and evaluates whether a classroom
is over ratio. Everything here is a pure function of its inputs.
"""
import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Mapping, Optional, Union


class RatioGroup(str, enum.Enum):
    INFANT = "infant"
    TODDLER = "toddler"
    PRESCHOOL = "preschool"
    PRE_K = "pre_k"
    KINDERGARTEN = "kindergarten"


class StatusIndicator(str, enum.Enum):
    GOOD = "good"            # strictly under capacity
    WARNING = "warning"      # exactly at capacity
    CRITICAL = "critical"    # over capacity


# (group, inclusive lower bound in months), youngest first
AGE_BANDS = [
    (RatioGroup.INFANT, 0),
    (RatioGroup.TODDLER, 19),
    (RatioGroup.PRESCHOOL, 36),
    (RatioGroup.PRE_K, 48),
    (RatioGroup.KINDERGARTEN, 60),
]

GROUP_ORDER = [group for group, _ in AGE_BANDS]

# Children per staff member
DEFAULT_RATIOS: Dict[RatioGroup, int] = {
    RatioGroup.INFANT: 4,
    RatioGroup.TODDLER: 6,
    RatioGroup.PRESCHOOL: 8,
    RatioGroup.PRE_K: 10,
    RatioGroup.KINDERGARTEN: 15,
}

GROUP_LABELS = {
    RatioGroup.INFANT: "Infant (under 19 months)",
    RatioGroup.TODDLER: "Toddler (19 months - 2 years)",
    RatioGroup.PRESCHOOL: "Preschool (3 years)",
    RatioGroup.PRE_K: "Pre-K (4 years)",
    RatioGroup.KINDERGARTEN: "Kindergarten / school age",
}

STATUS_COLORS = {
    StatusIndicator.GOOD: "#27AE60",
    StatusIndicator.WARNING: "#F39C12",
    StatusIndicator.CRITICAL: "#E74C3C",
}
UNKNOWN_STATUS_COLOR = "#95A5A6"


@dataclass(frozen=True)
class ChildRatioInput:
    child_id: str
    first_name: str
    last_name: str
    age_in_months: Optional[int]
    is_kindergarten_enrolled: bool = False

    @property
    def ratio_group(self) -> Optional[RatioGroup]:
        return classify_ratio_group(self.age_in_months, self.is_kindergarten_enrolled)


@dataclass(frozen=True)
class EffectiveRatio:
    # None on both fields means "no constraint"
    effective_ratio: Optional[int]
    dominant_group: Optional[RatioGroup]

    @property
    def is_unconstrained(self) -> bool:
        return self.effective_ratio is None


NO_CONSTRAINT = EffectiveRatio(effective_ratio=None, dominant_group=None)


@dataclass(frozen=True)
class GroupCount:
    group: RatioGroup
    count: int
    required_ratio: int


@dataclass(frozen=True)
class RatioStatus:
    children_count: int
    staff_count: int
    required_ratio: Optional[int]
    actual_ratio: float
    max_allowed_children: Optional[int]
    is_over_ratio: bool
    dominant_group: Optional[RatioGroup] = None
    unclassified_count: int = 0
    children_by_group: List[GroupCount] = field(default_factory=list)

    @property
    def status_indicator(self) -> StatusIndicator:
        return status_indicator(self)


def calculate_age_in_months(
    date_of_birth: Optional[Union[date, datetime]],
    as_of: Optional[Union[date, datetime]] = None,
) -> Optional[int]:
    """Whole months between birth and ``as_of`` (default today), floored.

    A month only counts once the birth day-of-month has been reached.
    Returns None when the date of birth is unknown.
    """
    if date_of_birth is None:
        return None
    if isinstance(date_of_birth, datetime):
        date_of_birth = date_of_birth.date()
    if as_of is None:
        as_of = date.today()
    elif isinstance(as_of, datetime):
        as_of = as_of.date()

    months = (as_of.year - date_of_birth.year) * 12 + (as_of.month - date_of_birth.month)
    if as_of.day < date_of_birth.day:
        months -= 1
    return max(0, months)


def classify_ratio_group(
    age_in_months: Optional[int], is_kindergarten_enrolled: bool = False
) -> Optional[RatioGroup]:
    """Regulatory age band for a child.

    Kindergarten enrollment wins regardless of age. Otherwise bands are
    matched youngest first with an inclusive lower bound, so a child exactly
    at a boundary belongs to the older band. Unknown age gives None.
    """
    if is_kindergarten_enrolled:
        return RatioGroup.KINDERGARTEN
    if age_in_months is None:
        return None

    matched = None
    for group, lower in AGE_BANDS:
        if age_in_months >= lower:
            matched = group
        else:
            break
    return matched


def required_ratio(group: RatioGroup, ratios: Optional[Mapping[RatioGroup, int]] = None) -> int:
    # Groups missing from a custom table keep the default ratio
    if ratios and group in ratios:
        return ratios[group]
    return DEFAULT_RATIOS[group]


def _represented_groups(children: Iterable[ChildRatioInput]) -> set:
    groups = set()
    for child in children:
        group = child.ratio_group
        if group is not None:
            groups.add(group)
    return groups


def effective_ratio(
    children: Iterable[ChildRatioInput],
    ratios: Optional[Mapping[RatioGroup, int]] = None,
) -> EffectiveRatio:
    """Strictest children-per-staff ratio among the groups present.

    Only the set of groups matters, never ordering or headcount per group.
    An empty room (or one where no child could be classified) has no
    constraint.
    """
    groups = _represented_groups(children)
    if not groups:
        return NO_CONSTRAINT

    # Ties go to the younger band
    dominant = min(groups, key=lambda g: (required_ratio(g, ratios), GROUP_ORDER.index(g)))
    return EffectiveRatio(effective_ratio=required_ratio(dominant, ratios), dominant_group=dominant)


def count_by_group(
    children: Iterable[ChildRatioInput],
    ratios: Optional[Mapping[RatioGroup, int]] = None,
) -> List[GroupCount]:
    counts: Dict[RatioGroup, int] = {}
    for child in children:
        group = child.ratio_group
        if group is not None:
            counts[group] = counts.get(group, 0) + 1
    return [
        GroupCount(group=g, count=counts[g], required_ratio=required_ratio(g, ratios))
        for g in GROUP_ORDER
        if g in counts
    ]


def calculate_ratio_status(
    staff_count: int,
    children: Iterable[ChildRatioInput],
    ratios: Optional[Mapping[RatioGroup, int]] = None,
) -> RatioStatus:
    """Evaluate a classroom snapshot.

    ``staff_count`` and ``children`` must come from the same read so the
    count and the ratio describe one instant.
    """
    if staff_count < 0:
        raise ValueError("staff_count must be >= 0")

    children = list(children)
    children_count = len(children)
    eff = effective_ratio(children, ratios)

    if eff.is_unconstrained:
        max_allowed = None
        is_over = False
    else:
        max_allowed = staff_count * eff.effective_ratio
        is_over = children_count > max_allowed

    # Nobody on duty with children present is over ratio whatever the mix
    if staff_count == 0 and children_count > 0:
        is_over = True

    actual = round(children_count / max(staff_count, 1), 2)
    by_group = count_by_group(children, ratios)
    classified = sum(g.count for g in by_group)

    return RatioStatus(
        children_count=children_count,
        staff_count=staff_count,
        required_ratio=eff.effective_ratio,
        actual_ratio=actual,
        max_allowed_children=max_allowed,
        is_over_ratio=is_over,
        dominant_group=eff.dominant_group,
        unclassified_count=children_count - classified,
        children_by_group=by_group,
    )


def status_indicator(status: RatioStatus) -> StatusIndicator:
    if status.is_over_ratio:
        return StatusIndicator.CRITICAL
    if (
        status.max_allowed_children is not None
        and status.children_count > 0
        and status.children_count == status.max_allowed_children
    ):
        return StatusIndicator.WARNING
    return StatusIndicator.GOOD


def format_ratio(ratio: Optional[int]) -> str:
    if ratio is None:
        return "no limit"
    return f"1:{ratio}"


def ratio_label(group: RatioGroup, ratios: Optional[Mapping[RatioGroup, int]] = None) -> str:
    return f"{GROUP_LABELS[group]} ({format_ratio(required_ratio(group, ratios))})"


def status_color(indicator: Union[StatusIndicator, str]) -> str:
    try:
        return STATUS_COLORS[StatusIndicator(indicator)]
    except ValueError:
        return UNKNOWN_STATUS_COLOR
