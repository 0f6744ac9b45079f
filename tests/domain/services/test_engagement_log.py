"""Tests for the engagement log."""

import pytest

from trust_lens.domain.errors import ValidationError
from trust_lens.domain.models.engagement import EngagementEvent
from trust_lens.domain.services.engagement_log import DAY_MS, EngagementLog


@pytest.fixture
def engagement(clock):
    """Create an enabled engagement log on the fake clock."""
    return EngagementLog(clock=clock)


def _now_ms(clock) -> int:
    return int(clock() * 1000)


def test_weekly_summary_counts_and_percentages(engagement, clock):
    """Test totals, rounded percentages and top domains."""
    engagement.record_visit("bbc.com", 8.8)
    engagement.record_visit("bbc.com", 8.8)
    engagement.record_visit("infowars.com", 1.4)

    summary = engagement.weekly_summary()

    assert summary.total == 3
    assert summary.reliable == 2
    assert summary.unreliable == 1
    assert summary.reliablePct == 67
    assert summary.unreliablePct == 33
    assert [(d.domain, d.count) for d in summary.topDomains] == [
        ("bbc.com", 2),
        ("infowars.com", 1),
    ]


def test_half_percentages_round_up(engagement):
    """Test half percentages round up."""
    for i in range(8):
        engagement.record_visit(f"site{i}.com", 9 if i < 1 else 2)

    summary = engagement.weekly_summary()

    # 1/8 = 12.5%, 7/8 = 87.5%
    assert summary.reliablePct == 13
    assert summary.unreliablePct == 88


def test_empty_summary(engagement):
    """Test an empty week."""
    summary = engagement.weekly_summary()

    assert summary.total == 0
    assert summary.reliablePct == 0
    assert summary.topDomains == []
    assert engagement.weekly_message(summary).startswith("No engagements")


def test_top_domains_limited_to_five(engagement):
    """Test only the five most visited domains are listed."""
    for i in range(7):
        for _ in range(7 - i):
            engagement.record_visit(f"site{i}.com", 8)

    summary = engagement.weekly_summary()

    assert [d.domain for d in summary.topDomains] == [f"site{i}.com" for i in range(5)]


def test_summary_covers_last_seven_days(engagement, clock):
    """Test older events are excluded from the weekly summary."""
    now = _now_ms(clock)
    engagement.log_engagement({"domain": "old.com", "rating": 8, "reliable": True, "ts": now - 8 * DAY_MS})
    engagement.log_engagement({"domain": "new.com", "rating": 2, "reliable": False, "ts": now - DAY_MS})

    summary = engagement.weekly_summary()

    assert summary.total == 1
    assert summary.topDomains[0].domain == "new.com"


def test_events_trimmed_to_ninety_days(engagement, clock):
    """Test logging drops events older than 90 days."""
    engagement.log_engagement({"domain": "a.com", "rating": 5})
    clock.advance(91 * 24 * 3600)
    engagement.log_engagement({"domain": "b.com", "rating": 5})

    assert [e.domain for e in engagement.events()] == ["b.com"]


def test_missing_timestamp_uses_clock(engagement, clock):
    """Test payloads without ts are stamped now."""
    engagement.log_engagement({"domain": "a.com", "rating": 5, "reliable": 1})

    event = engagement.events()[0]
    assert event.ts == _now_ms(clock)
    assert event.reliable is True


def test_disabled_log_skips(clock):
    """Test a disabled log records nothing."""
    engagement = EngagementLog(clock=clock, enabled=False)

    result = engagement.log_engagement(EngagementEvent(domain="a.com", rating=8, ts=1))

    assert result == {"ok": True, "skipped": True}
    assert engagement.events() == []


def test_toggle_logging(engagement):
    """Test logging can be switched off and on."""
    engagement.set_enabled(False)
    assert engagement.record_visit("a.com", 8)["skipped"] is True

    engagement.set_enabled(True)
    assert engagement.record_visit("a.com", 8) == {"ok": True}


def test_reliable_threshold(clock):
    """Test the reliable flag follows the configured threshold."""
    engagement = EngagementLog(clock=clock, reliable_threshold=8)
    engagement.record_visit("a.com", 7.9)
    engagement.record_visit("b.com", 8)

    assert [e.reliable for e in engagement.events()] == [False, True]


def test_invalid_payload(engagement):
    """Test payloads without a domain are rejected."""
    with pytest.raises(ValidationError):
        engagement.log_engagement({"rating": 5})


def test_weekly_message(engagement):
    """Test the notification text."""
    engagement.record_visit("bbc.com", 9)

    assert engagement.weekly_message() == (
        "This week: 100% reliable, 0% unreliable across 1 engagements."
    )
