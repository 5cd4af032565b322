from starlette.requests import Request

from rate_limiter import SlidingWindowLimiter, get_real_ip


def test_admits_up_to_max_calls_then_rejects(window):
    assert all(window.try_admit() for _ in range(30))
    assert window.try_admit() is False
    assert window.in_window == 30


def test_rejection_does_not_record_a_call(window, clock):
    for _ in range(30):
        window.try_admit()
    for _ in range(5):
        assert window.try_admit() is False
    clock.advance(60.001)
    assert window.try_admit() is True
    assert window.in_window == 1


def test_admission_resumes_after_window_elapses(window, clock):
    for _ in range(30):
        window.try_admit()
    clock.advance(30)
    assert window.try_admit() is False
    clock.advance(30.5)
    assert window.try_admit() is True


def test_calls_exactly_at_window_edge_still_count(window, clock):
    for _ in range(30):
        window.try_admit()
    clock.advance(60)
    assert window.try_admit() is False


def test_old_entries_are_purged_lazily(clock):
    limiter = SlidingWindowLimiter(max_calls=3, window_seconds=10, clock=clock)
    limiter.try_admit()
    clock.advance(5)
    limiter.try_admit()
    limiter.try_admit()
    assert limiter.try_admit() is False
    clock.advance(5.5)
    assert limiter.try_admit() is True
    assert limiter.in_window == 3


def test_reset_clears_window(window):
    for _ in range(30):
        window.try_admit()
    window.reset()
    assert window.try_admit() is True


def _request(headers=None, client=("10.0.0.9", 1234)):
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "headers": raw, "client": client})


def test_real_ip_prefers_forwarded_for():
    request = _request({"x-forwarded-for": "1.2.3.4, 5.6.7.8", "x-real-ip": "9.9.9.9"})
    assert get_real_ip(request) == "1.2.3.4"


def test_real_ip_falls_back_to_real_ip_then_peer():
    assert get_real_ip(_request({"x-real-ip": "9.9.9.9"})) == "9.9.9.9"
    assert get_real_ip(_request()) == "10.0.0.9"
    assert get_real_ip(_request(client=None)) == "127.0.0.1"
