"""
Tests for the response envelope and the code → HTTP status mapping.
"""

import json
from datetime import datetime, timedelta

import pytest

from utils.errors import DatabaseError, NotFoundError
from utils.response import ApiResponse, http_status_for


class TestStatusMapping:
    @pytest.mark.parametrize("code", [200, 201, 400, 401, 403, 404, 422, 500])
    def test_known_codes_map_to_themselves(self, code):
        assert http_status_for(code) == code

    @pytest.mark.parametrize("code", [409, 418, 503, 1001])
    def test_unknown_codes_fall_back_to_ok(self, code):
        assert http_status_for(code) == 200


class TestEnvelope:
    def test_success_shape(self):
        body = ApiResponse.success({"x": 1}).body()
        assert body["code"] == 200
        assert body["message"] == "success"
        assert body["data"] == {"x": 1}

    def test_data_omitted_when_absent(self):
        body = ApiResponse.error(404, "Resource not found").body()
        assert "data" not in body
        assert set(body) == {"code", "message", "timestamp"}

    def test_timestamp_has_utc_plus_eight_offset(self):
        ts = datetime.fromisoformat(ApiResponse.success().timestamp)
        assert ts.utcoffset() == timedelta(hours=8)

    def test_to_response_uses_mapped_status(self):
        resp = ApiResponse.error(403, "Forbidden").to_response()
        assert resp.status_code == 403
        assert json.loads(resp.body)["message"] == "Forbidden"

    def test_unknown_code_still_reported_in_body(self):
        resp = ApiResponse.error(409, "Conflict").to_response()
        assert resp.status_code == 200
        assert json.loads(resp.body)["code"] == 409


class TestFromResult:
    def test_success(self):
        assert ApiResponse.from_result([1, 2]).data == [1, 2]

    def test_failure_becomes_500(self):
        resp = ApiResponse.from_result(exc=NotFoundError())
        assert resp.code == 500
        assert resp.message == "Resource not found"

    def test_failure_hides_internal_detail(self):
        resp = ApiResponse.from_result(exc=DatabaseError(detail="password=hunter2 connection refused"))
        assert "hunter2" not in resp.message
