from hello_ai.core.constants import RETENTION_DAYS, RETENTION_MS
from hello_ai.services.retention import now_ms, retention_cutoff_ms


def test_cutoff_is_ninety_days_before_now():
    assert RETENTION_DAYS == 90
    assert retention_cutoff_ms(1_000_000_000_000) == 1_000_000_000_000 - 90 * 24 * 60 * 60 * 1000


def test_cutoff_defaults_to_current_time():
    before = now_ms()
    cutoff = retention_cutoff_ms()
    after = now_ms()
    assert before - RETENTION_MS <= cutoff <= after - RETENTION_MS
