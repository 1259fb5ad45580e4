import pytest

from hnsconfig.admission import (
    AdmissionResponse,
    Status,
    StatusCause,
    StatusReason,
    allow,
    code_from_reason,
    deny,
    deny_invalid,
)


@pytest.mark.parametrize(
    "reason, code",
    [
        (StatusReason.UNKNOWN, 500),
        (StatusReason.UNAUTHORIZED, 401),
        (StatusReason.FORBIDDEN, 403),
        (StatusReason.CONFLICT, 409),
        (StatusReason.BAD_REQUEST, 400),
        (StatusReason.INVALID, 422),
        (StatusReason.INTERNAL_ERROR, 500),
        (StatusReason.SERVICE_UNAVAILABLE, 503),
    ],
)
def test_code_from_reason(reason, code):
    assert code_from_reason(reason) == code


def test_code_from_reason_accepts_plain_strings():
    assert code_from_reason("Conflict") == code_from_reason(StatusReason.CONFLICT)


def test_code_from_unlisted_reason_defaults_to_500():
    assert code_from_reason("NotFound") == 500


def test_allow_has_zero_code_and_message():
    resp = allow("HNC SA")
    assert resp.allowed is True
    assert resp.result.code == 0
    assert resp.result.message == "HNC SA"
    assert resp.result.reason == StatusReason.UNKNOWN
    assert resp.result.causes == []


@pytest.mark.parametrize("reason", list(StatusReason))
def test_deny_sets_reason_and_matching_code(reason):
    resp = deny(reason, "nope")
    assert resp.allowed is False
    assert resp.result.reason == reason
    assert resp.result.code == code_from_reason(reason)
    assert resp.result.message == "nope"


def test_deny_forbidden():
    resp = deny(StatusReason.FORBIDDEN, "The requested parent x does not exist")
    assert resp == AdmissionResponse(
        allowed=False,
        result=Status(
            code=403,
            message="The requested parent x does not exist",
            reason=StatusReason.FORBIDDEN,
        ),
    )


def test_deny_invalid_repeats_message_in_causes():
    resp = deny_invalid("spec.parent", "bad parent")
    assert resp.allowed is False
    assert resp.result.code == 422
    assert resp.result.reason == StatusReason.INVALID
    assert resp.result.message == "bad parent"
    assert resp.result.causes == [StatusCause(message="bad parent", field="spec.parent")]


def test_deny_responses_do_not_share_causes():
    first = deny_invalid("a", "one")
    second = deny(StatusReason.INVALID, "two")
    assert second.result.causes == []
    assert len(first.result.causes) == 1