from datetime import datetime, timezone

import pytest
import requests

from conftest import PORTAL_HTML, make_response

from current_feeds.providers.base import FetchFailure


def test_first_fetch_builds_and_caches_feed(wikinews, session, clock):
    feed = wikinews.fetch()

    session.get.assert_called_once_with(
        "https://en.wikipedia.org/wiki/Portal:Current_events/2026_October_16", timeout=10.0
    )
    assert feed.date == "October 16, 2026"
    assert feed.source_url == "https://en.wikipedia.org/wiki/Portal:Current_events/2026_October_16"
    assert feed.updated == "2026-10-17 08:00:00"
    assert feed.updated_at == int(clock().timestamp() * 1000)
    assert len(feed.categories) == 2
    assert wikinews.cached.feed is feed
    assert wikinews.cached.key == "2026-10-17"


def test_cache_hit_skips_upstream(wikinews, session, clock):
    first = wikinews.fetch()
    clock.advance(hours=15)

    assert wikinews.fetch() is first
    assert session.get.call_count == 1


def test_new_day_refetches(wikinews, session, clock):
    wikinews.fetch()
    clock.now = datetime(2026, 10, 18, 0, 30, tzinfo=timezone.utc)

    feed = wikinews.fetch()

    assert session.get.call_count == 2
    assert session.get.call_args.args[0].endswith("/2026_October_17")
    assert feed.date == "October 17, 2026"


def test_server_error_without_cache_raises(wikinews, session):
    session.get.return_value = make_response(500, "oops")

    with pytest.raises(FetchFailure) as excinfo:
        wikinews.fetch()

    assert excinfo.value.status == 500
    assert excinfo.value.url.endswith("/2026_October_16")
    assert wikinews.cached is None


def test_server_error_with_stale_cache_returns_previous_feed(wikinews, session, clock):
    first = wikinews.fetch()
    clock.advance(days=1)
    session.get.return_value = make_response(500, "oops")

    assert wikinews.fetch() is first
    assert session.get.call_count == 2
    assert wikinews.cached.feed is first
    assert wikinews.cached.key == "2026-10-17"


def test_network_error_is_fetch_failure(wikinews, session):
    session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(FetchFailure):
        wikinews.fetch()


def test_extraction_exception_falls_back_to_cache(wikinews, clock, monkeypatch):
    first = wikinews.fetch()
    clock.advance(days=1)

    def boom(html):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(wikinews, "extract", boom)

    assert wikinews.fetch() is first


def test_extraction_exception_without_cache_is_fetch_failure(wikinews, monkeypatch):
    def boom(html):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(wikinews, "extract", boom)

    with pytest.raises(FetchFailure):
        wikinews.fetch()


def test_degraded_extraction_is_still_served(wikinews, session):
    session.get.return_value = make_response(200, "<html>redesigned page</html>")

    feed = wikinews.fetch()

    assert [category.title for category in feed.categories] == ["Error"]
    assert feed.categories[0].items[0].text
    assert wikinews.cached.feed is feed


def test_successful_refetch_replaces_entry(wikinews, session, clock):
    first = wikinews.fetch()
    clock.advance(days=1)
    session.get.return_value = make_response(200, PORTAL_HTML)

    second = wikinews.fetch()

    assert second is not first
    assert wikinews.cached.feed is second


def test_duration_cache_window(readhub, clock):
    readhub.fetch()
    clock.advance(minutes=29)
    readhub.fetch()
    assert readhub._session.get.call_count == 1

    clock.advance(minutes=2)
    readhub.fetch()
    assert readhub._session.get.call_count == 2
