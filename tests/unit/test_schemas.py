"""
Tests for error models, request payloads and lookup results.
"""

import pydantic
import pytest

from yildiz.http import HttpResponse
from yildiz.schemas import (
    Absent,
    EdgePayload,
    ErrorCodes,
    Failed,
    Found,
    StatusMismatchException,
    UnexpectedStatusException,
    UpsertRelationPayload,
    YildizError,
    YildizException,
    interpret_lookup,
    unwrap,
)


class TestErrors:

    def test_error_model_roundtrip(self):
        error = YildizError(code=ErrorCodes.STATUS_MISMATCH, message="bad", details={"a": 1})
        exc = error.to_exception()

        assert isinstance(exc, YildizException)
        assert exc.code == ErrorCodes.STATUS_MISMATCH
        assert exc.to_error_model() == error

    def test_status_mismatch_details(self):
        exc = StatusMismatchException(404, 200, server_message="gone")

        assert exc.code == ErrorCodes.STATUS_MISMATCH
        assert exc.details == {"status_code": 404, "expected_status": 200, "server_message": "gone"}
        assert not exc.retryable
        assert "StatusMismatchException" in repr(exc)

    def test_unexpected_status_message(self):
        exc = UnexpectedStatusException(502)
        assert str(exc) == "Unexpected status code: 502."
        assert exc.to_error_model().details == {"status_code": 502}


class TestPayloads:

    def test_edge_payload_uses_wire_names(self):
        payload = EdgePayload(left_id=1, right_id=2)
        assert payload.to_wire() == {
            "leftId": 1,
            "rightId": 2,
            "relation": "1",
            "attributes": {},
            "ttld": False,
            "extend": {},
        }

    def test_payload_accepts_wire_names(self):
        payload = EdgePayload(leftId="a", rightId="b", relation=7)
        assert payload.left_id == "a"
        assert payload.relation == 7

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            EdgePayload(left_id=1, right_id=2, colour="red")

    def test_upsert_requires_edge_time(self):
        with pytest.raises(pydantic.ValidationError):
            UpsertRelationPayload(left_node_identifier_val="a", right_node_identifier_val="b")


class TestLookupResults:

    @staticmethod
    def _response(status_code, body=None):
        return HttpResponse(status_code=status_code, body=body)

    def test_200_is_found(self):
        result = interpret_lookup(self._response(200, {"id": 1}))
        assert result == Found({"id": 1})
        assert unwrap(result) == {"id": 1}

    def test_404_is_absent(self):
        result = interpret_lookup(self._response(404, {"error": "not found"}))
        assert isinstance(result, Absent)
        assert unwrap(result) is None

    @pytest.mark.parametrize("status_code", [201, 204, 400, 500])
    def test_other_status_is_failed(self, status_code):
        result = interpret_lookup(self._response(status_code))

        assert isinstance(result, Failed)
        assert result.error.status_code == status_code
        with pytest.raises(UnexpectedStatusException, match=str(status_code)):
            unwrap(result)
