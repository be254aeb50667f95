"""Tests for the tenacity-backed poll policy adapter."""

import time

import pytest

from sgai.adapters.poll_policy_tenacity import TenacityPollPolicyAdapter
from sgai.core.exceptions import DeadlineExceededError, HttpStatusError


def scripted(*outcomes):
    calls = []
    remaining = list(outcomes)

    async def attempt():
        calls.append(time.monotonic())
        outcome = remaining.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    return attempt, calls


@pytest.mark.asyncio
async def test_returns_first_non_pending_result():
    attempt, calls = scripted("running", "running", "done")

    result = await TenacityPollPolicyAdapter().run(
        attempt, lambda s: s == "running", timeout_s=1.0, interval_s=0.01
    )

    assert result == "done"
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_first_attempt_always_runs():
    attempt, calls = scripted("done")

    result = await TenacityPollPolicyAdapter().run(
        attempt, lambda s: s == "running", timeout_s=0.001, interval_s=5.0
    )

    assert result == "done"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_stops_before_a_wait_would_pass_the_deadline():
    attempt, calls = scripted(*["running"] * 50)

    with pytest.raises(DeadlineExceededError) as excinfo:
        await TenacityPollPolicyAdapter().run(
            attempt, lambda s: s == "running", timeout_s=0.05, interval_s=0.02
        )

    assert excinfo.value.timeout_s == 0.05
    assert 1 <= len(calls) <= 4


@pytest.mark.asyncio
async def test_attempt_errors_are_not_retried():
    attempt, calls = scripted(HttpStatusError(500), "done")

    with pytest.raises(HttpStatusError):
        await TenacityPollPolicyAdapter().run(
            attempt, lambda s: s == "running", timeout_s=1.0, interval_s=0.01
        )

    assert len(calls) == 1
