from datetime import datetime, timedelta, timezone

from codehelper.services.eligibility import check_post_assessment_eligibility, get_post_assessment_message

NOW = datetime(2025, 10, 1, 12, 0, tzinfo=timezone.utc)


def test_eligible_after_thirty_minutes():
    result = check_post_assessment_eligibility(NOW - timedelta(minutes=30), now=NOW)
    assert result.is_eligible
    assert result.minutes_since_registration == 30
    assert result.min_minutes_required == 30
    assert result.progress_percentage == 100


def test_halfway_at_fifteen_minutes():
    result = check_post_assessment_eligibility(NOW - timedelta(minutes=15), now=NOW)
    assert not result.is_eligible
    assert result.progress_percentage == 50


def test_minutes_are_floored():
    result = check_post_assessment_eligibility(NOW - timedelta(minutes=29, seconds=59), now=NOW)
    assert result.minutes_since_registration == 29
    assert not result.is_eligible
    assert result.progress_percentage == 97


def test_progress_is_capped():
    result = check_post_assessment_eligibility(NOW - timedelta(days=3), now=NOW)
    assert result.is_eligible
    assert result.progress_percentage == 100


def test_naive_registration_time_is_treated_as_utc():
    registered = (NOW - timedelta(minutes=45)).replace(tzinfo=None)
    assert check_post_assessment_eligibility(registered, now=NOW).minutes_since_registration == 45


def test_messages():
    ready = check_post_assessment_eligibility(NOW - timedelta(minutes=31), now=NOW)
    assert get_post_assessment_message(ready) == "You're ready for post-assessment!"

    one_left = check_post_assessment_eligibility(NOW - timedelta(minutes=29), now=NOW)
    assert get_post_assessment_message(one_left) == "Complete 1 more minute to unlock post-assessment"

    ten_left = check_post_assessment_eligibility(NOW - timedelta(minutes=20), now=NOW)
    assert get_post_assessment_message(ten_left) == "Complete 10 more minutes to unlock post-assessment"
