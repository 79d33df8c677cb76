from datetime import datetime, timedelta

from apps.core.window import is_current, is_expired

from conftest import NOW


class TestTimeWindow:

    def test_no_window_is_always_current_and_never_expired(self, make_status):
        status = make_status()
        for now in (NOW, NOW + timedelta(days=3650), NOW - timedelta(days=3650)):
            assert is_current(status, now)
            assert not is_expired(status, now)

    def test_end_time_boundary(self, make_status):
        status = make_status(start_time=NOW - timedelta(hours=1), end_time=NOW)
        assert is_current(status, NOW - timedelta(microseconds=1))
        assert not is_expired(status, NOW - timedelta(microseconds=1))
        assert not is_current(status, NOW)
        assert is_expired(status, NOW)
        assert is_expired(status, NOW + timedelta(seconds=1))

    def test_future_scheduled_status_is_current(self, make_status):
        status = make_status(start_time=NOW + timedelta(days=1), end_time=NOW + timedelta(days=2))
        assert is_current(status, NOW)
        assert not is_expired(status, NOW)

    def test_start_only_status_is_current_indefinitely(self, make_status):
        status = make_status(start_time=NOW + timedelta(days=1))
        assert is_current(status, NOW + timedelta(days=3650))
        assert not is_expired(status, NOW + timedelta(days=3650))

    def test_naive_datetimes_are_treated_as_utc(self, make_status):
        status = make_status(end_time=datetime(2026, 10, 19, 12, 0))
        assert is_expired(status, NOW)
        assert is_current(status, NOW - timedelta(minutes=1))
