"""Unit tests for ApiResult envelopes and the envelope builder."""

import pytest
from pydantic import ValidationError

from sgai.core.exceptions import PollingTimeoutError, RequestTimeoutError
from sgai.core.managers.envelope_builder import fail, ok, run_enveloped
from sgai.core.models.envelope import ApiResult


def test_ok_envelope_carries_data_and_elapsed():
    res = ok({"status": "done"}, 42)

    assert res.status == "success"
    assert res.is_success
    assert res.data == {"status": "done"}
    assert res.error is None
    assert res.elapsed_ms == 42


def test_ok_envelope_never_reports_negative_elapsed():
    assert ok({"a": 1}, -3).elapsed_ms == 0


def test_fail_envelope_from_exception():
    res = fail(RequestTimeoutError())

    assert res.status == "error"
    assert not res.is_success
    assert res.data is None
    assert res.error == "Request timed out"
    assert res.elapsed_ms == 0


def test_fail_envelope_from_string_and_unknown():
    assert fail("boom").error == "boom"
    assert fail(None).error == "Unknown error"
    # Exceptions without a message fall back to their type name
    assert fail(RuntimeError()).error == "RuntimeError"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": "success", "data": None, "elapsed_ms": 1},
        {"status": "success", "data": {"a": 1}, "error": "x"},
        {"status": "error", "data": {"a": 1}, "error": "x"},
        {"status": "error", "error": None},
        {"status": "error", "error": "x", "elapsed_ms": 5},
        {"status": "success", "data": {"a": 1}, "elapsed_ms": -1},
    ],
)
def test_envelope_rejects_inconsistent_slots(kwargs):
    with pytest.raises(ValidationError):
        ApiResult(**kwargs)


@pytest.mark.asyncio
async def test_run_enveloped_success():
    async def operation():
        return {"status": "done"}, 7

    res = await run_enveloped(operation)

    assert res.status == "success"
    assert res.elapsed_ms == 7


@pytest.mark.asyncio
async def test_run_enveloped_converts_every_exception():
    async def operation():
        raise PollingTimeoutError("job-1", 0.5)

    res = await run_enveloped(operation)

    assert res.status == "error"
    assert res.error == "Polling timed out"
    assert res.elapsed_ms == 0
