import pytest

from src.timesheet_payroll.timesheet_payroll.common.retry import NO_RETRY, RetryPolicy


class Flaky:
    def __init__(self, failures, exc=ConnectionError):
        self.failures = failures
        self.exc = exc
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc("transient")
        return "ok"


def test_retries_until_success_with_backoff():
    sleeps = []
    policy = RetryPolicy(max_attempts=3, base_delay=0.5, retry_on=(ConnectionError,), sleep=sleeps.append)
    fn = Flaky(failures=2)

    assert policy.call(fn) == "ok"
    assert fn.calls == 3
    assert sleeps == [0.5, 1.0]


def test_gives_up_after_max_attempts():
    policy = RetryPolicy(max_attempts=2, base_delay=0, retry_on=(ConnectionError,), sleep=lambda _: None)
    fn = Flaky(failures=5)

    with pytest.raises(ConnectionError):
        policy.call(fn)
    assert fn.calls == 2


def test_non_retryable_errors_raise_immediately():
    policy = RetryPolicy(max_attempts=5, base_delay=0, retry_on=(ConnectionError,), sleep=lambda _: None)
    fn = Flaky(failures=1, exc=ValueError)

    with pytest.raises(ValueError):
        policy.call(fn)
    assert fn.calls == 1


def test_predicate_takes_precedence_over_exception_types():
    policy = RetryPolicy(
        max_attempts=3,
        base_delay=0,
        retry_on=(ConnectionError,),
        is_retryable=lambda e: isinstance(e, ValueError),
        sleep=lambda _: None,
    )
    fn = Flaky(failures=1, exc=ValueError)

    assert policy.call(fn) == "ok"


def test_delay_is_capped():
    policy = RetryPolicy(base_delay=1.0, multiplier=10.0, max_delay=5.0)
    assert [policy.delay_for(n) for n in (1, 2, 3)] == [1.0, 5.0, 5.0]


def test_no_retry_policy_calls_once():
    fn = Flaky(failures=1)
    with pytest.raises(ConnectionError):
        NO_RETRY.call(fn)
    assert fn.calls == 1
