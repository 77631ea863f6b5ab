from __future__ import annotations

import asyncio

import pytest

from conftest import RecordingLookup, make_record
from vehicle_ownership.core.reconciliation import (
    OwnershipReconciler,
    ReasonCode,
    ReconciliationRequest,
    Verdict,
    map_vehicle_type,
)
from vehicle_ownership.core.registry import Found, LookupErrorKind, LookupFailed, NotFound


def _reconcile(lookup, plate="ABC123", document_type="CC", document_number="1020304050", full_name="José Pérez", **kwargs):
    reconciler = OwnershipReconciler(lookup, **kwargs)
    return asyncio.run(reconciler.reconcile(plate, document_type, document_number, full_name))


def test_happy_path_returns_vehicle_data(found_lookup):
    result = _reconcile(found_lookup, plate="abc123")

    assert result.verdict is Verdict.VALID
    assert result.reason_code is None
    assert result.message is None
    assert found_lookup.calls == ["ABC123"]

    data = result.vehicle_data
    assert data is not None
    assert data.brand == "MAZDA"
    assert data.model == "3 TOURING"
    assert data.year == 2019
    assert data.color == "ROJO"
    assert data.vehicle_type == "car"
    assert data.soat_expiry == "2026-03-01"


def test_invalid_plate_short_circuits_before_lookup(found_lookup):
    result = _reconcile(found_lookup, plate="AB123")

    assert result.verdict is Verdict.INVALID
    assert result.reason_code is ReasonCode.INVALID_PLATE_FORMAT
    assert result.vehicle_data is None
    assert found_lookup.calls == []


@pytest.mark.parametrize("plate", ["aß12x", "ABC12ı", "ﬀa12b"])
def test_non_ascii_plate_is_rejected_before_lookup(plate):
    lookup = RecordingLookup(Found(record=make_record(plate="ASS12X")))
    result = _reconcile(lookup, plate=plate)

    assert result.verdict is Verdict.INVALID
    assert result.reason_code is ReasonCode.INVALID_PLATE_FORMAT
    assert lookup.calls == []


def test_invalid_document_short_circuits_before_lookup(found_lookup):
    result = _reconcile(found_lookup, document_number="12345")

    assert result.reason_code is ReasonCode.INVALID_DOCUMENT_FORMAT
    assert found_lookup.calls == []


def test_plate_checked_before_document(found_lookup):
    result = _reconcile(found_lookup, plate="", document_number="")
    assert result.reason_code is ReasonCode.INVALID_PLATE_FORMAT


def test_unknown_plate_is_vehicle_not_found():
    lookup = RecordingLookup(NotFound(plate="XYZ987"))
    result = _reconcile(lookup, plate="XYZ987")

    assert result.reason_code is ReasonCode.VEHICLE_NOT_FOUND
    assert lookup.calls == ["XYZ987"]


def test_name_without_common_words_is_owner_mismatch(found_lookup):
    result = _reconcile(found_lookup, full_name="Carlos Ramírez")
    assert result.reason_code is ReasonCode.OWNER_MISMATCH


def test_document_number_must_match_exactly(found_lookup):
    result = _reconcile(found_lookup, document_number="01020304050")
    assert result.reason_code is ReasonCode.OWNER_MISMATCH


@pytest.mark.parametrize(
    ("requester_type", "registry_type"),
    [("CE", "CC"), ("CC", "CE"), ("PA", "PA"), ("cc", "CC")],
)
def test_only_accepted_document_type_proves_ownership(requester_type, registry_type):
    lookup = RecordingLookup(Found(record=make_record(owner_document_type=registry_type)))
    result = _reconcile(lookup, document_type=requester_type)
    assert result.reason_code is ReasonCode.OWNER_MISMATCH


def test_accepted_document_type_is_configurable():
    lookup = RecordingLookup(Found(record=make_record(owner_document_type="CE")))
    result = _reconcile(lookup, document_type="CE", accepted_document_type="CE")
    assert result.verdict is Verdict.VALID


def test_lookup_exception_becomes_system_error():
    lookup = RecordingLookup(ConnectionError("registry unreachable"))
    result = _reconcile(lookup)

    assert result.verdict is Verdict.INVALID
    assert result.reason_code is ReasonCode.SYSTEM_ERROR
    assert result.reason_code.retryable is True
    assert lookup.calls == ["ABC123"]


def test_lookup_failure_outcome_becomes_system_error():
    lookup = RecordingLookup(LookupFailed(kind=LookupErrorKind.TRANSPORT, cause="timeout"))
    result = _reconcile(lookup)
    assert result.reason_code is ReasonCode.SYSTEM_ERROR


def test_unexpected_lookup_result_becomes_system_error():
    lookup = RecordingLookup({"owner": "someone"})  # type: ignore[arg-type]
    result = _reconcile(lookup)
    assert result.reason_code is ReasonCode.SYSTEM_ERROR


def test_only_system_error_is_retryable():
    assert [code for code in ReasonCode if code.retryable] == [ReasonCode.SYSTEM_ERROR]


def test_delay_runs_before_lookup(found_lookup):
    events: list[str] = []

    async def fake_delay():
        events.append("delay")

    class OrderedLookup:
        async def lookup(self, plate):
            events.append("lookup")
            return await found_lookup.lookup(plate)

    result = _reconcile(OrderedLookup(), delay=fake_delay)
    assert result.verdict is Verdict.VALID
    assert events == ["delay", "lookup"]


def test_latency_window_sleeps_within_bounds(found_lookup, monkeypatch):
    slept: list[float] = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    monkeypatch.setattr("vehicle_ownership.core.reconciliation.asyncio.sleep", fake_sleep)
    result = _reconcile(found_lookup, latency=(1.5, 2.5))

    assert result.verdict is Verdict.VALID
    assert len(slept) == 1
    assert 1.5 <= slept[0] <= 2.5


def test_no_delay_when_latency_disabled(found_lookup, monkeypatch):
    async def fail_sleep(seconds):  # pragma: no cover - must not be called
        raise AssertionError("sleep should not be awaited")

    monkeypatch.setattr("vehicle_ownership.core.reconciliation.asyncio.sleep", fail_sleep)
    assert _reconcile(found_lookup).verdict is Verdict.VALID


def test_reconcile_request_wraps_reconcile(found_lookup):
    reconciler = OwnershipReconciler(found_lookup)
    request = ReconciliationRequest(
        plate="ABC123",
        requester_document_type="CC",
        requester_document_number="1020304050",
        requester_full_name="jose antonio perez gomez",
    )
    result = asyncio.run(reconciler.reconcile_request(request))
    assert result.is_valid is True


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Automóvil", "car"),
        ("Motocicleta", "motorcycle"),
        ("Camioneta", "van"),
        ("Camión", "truck"),
        ("Bus", "car"),
        ("", "car"),
        (None, "car"),
    ],
)
def test_map_vehicle_type_defaults_to_car(label, expected):
    assert map_vehicle_type(label) == expected
