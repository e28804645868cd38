from datetime import datetime, timedelta, timezone

from crypto_gateway.observability import RuntimeObservability


def test_request_timing_aggregates():
    obs = RuntimeObservability()
    assert obs.latency_summary() == {"request_count": 0, "average": 0.0, "max": 0.0, "last": 0.0}
    obs.record_request(100)
    obs.record_request(50)

    assert obs.latency_summary() == {"request_count": 2, "average": 75.0, "max": 100.0, "last": 50.0}


def test_supply_write_normalized_to_utc():
    obs = RuntimeObservability()
    assert obs.last_supply_write is None
    obs.mark_supply_write(datetime(2024, 1, 1, 5, 30, tzinfo=timezone(timedelta(hours=5, minutes=30))))
    assert obs.last_supply_write == datetime(2024, 1, 1, tzinfo=timezone.utc)
