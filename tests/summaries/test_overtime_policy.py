import pytest

from workorder_timekeeping.core.exceptions import ValidationError
from workorder_timekeeping.summaries.policies.weekly_threshold import WeeklyThresholdPolicy


@pytest.mark.parametrize("total", [0.0, 12.5, 39.99, 40.0])
def test_no_overtime_up_to_threshold(total):
    decision = WeeklyThresholdPolicy().evaluate(total)

    assert decision.is_overtime is False
    assert decision.overtime_hours == 0.0
    assert decision.regular_hours == pytest.approx(total)


def test_overtime_above_threshold():
    decision = WeeklyThresholdPolicy().evaluate(43.5)

    assert decision.is_overtime is True
    assert decision.overtime_hours == pytest.approx(3.5)
    assert decision.regular_hours == pytest.approx(40.0)


def test_overtime_is_non_decreasing_in_total_hours():
    policy = WeeklyThresholdPolicy()
    totals = [i * 0.5 for i in range(0, 120)]
    overtime = [policy.evaluate(t).overtime_hours for t in totals]

    assert overtime == sorted(overtime)


def test_threshold_is_configurable():
    decision = WeeklyThresholdPolicy(threshold=35).evaluate(38)

    assert decision.overtime_hours == pytest.approx(3.0)


def test_negative_threshold_rejected():
    with pytest.raises(ValidationError):
        WeeklyThresholdPolicy(threshold=-1)
