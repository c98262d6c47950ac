import pytest

from fa_archiver.errors import RetryExhausted
from fa_archiver.retry import RetryPolicy


def test_returns_first_accepted_result():
    results = iter([1, 2, 3])
    policy = RetryPolicy(max_attempts=5)

    assert policy.run(lambda: next(results), lambda r: r >= 2) == 2


def test_exhaustion_carries_last_result():
    policy = RetryPolicy(max_attempts=3)

    with pytest.raises(RetryExhausted) as info:
        policy.run(lambda: "bad", lambda r: False)
    assert info.value.attempts == 3
    assert info.value.last_result == "bad"


def test_listed_exceptions_count_as_attempts():
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError("reset")
        return "ok"

    policy = RetryPolicy(max_attempts=3, retry_on=(ConnectionError,))
    assert policy.run(flaky) == "ok"
    assert len(calls) == 3


def test_other_exceptions_propagate():
    policy = RetryPolicy(max_attempts=3, retry_on=(ConnectionError,))

    with pytest.raises(KeyError):
        policy.run(lambda: {}["x"])


def test_backoff_between_attempts_only():
    slept = []
    policy = RetryPolicy(max_attempts=3, backoff=lambda n: n * 0.5, sleep=slept.append)

    with pytest.raises(RetryExhausted):
        policy.run(lambda: None, lambda r: False)
    assert slept == [0.5, 1.0]
