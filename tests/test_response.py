"""
Tests for the Response value
"""
from multicard_sdk import Response


class TestResponse:
    def test_envelope_accessors(self):
        response = Response(200, {"success": True, "data": {"uuid": "p1", "status": "success"}})

        assert response.is_success
        assert response.data == {"uuid": "p1", "status": "success"}
        assert response["uuid"] == "p1"
        assert response.get("missing", "default") == "default"
        assert response.error_code is None

    def test_error_fields(self):
        response = Response(200, {"success": False, "error": {"code": "ERROR_X", "details": "why"}})

        assert not response.is_success
        assert response.error_code == "ERROR_X"
        assert response.error_details == "why"
        assert response.data is None

    def test_success_must_be_true(self):
        """Should only treat a literal True as success."""
        assert not Response(200, {"success": "true"}).is_success
        assert not Response(200, {"success": 1}).is_success

    def test_non_object_body(self):
        response = Response(200, ["a", "b"])

        assert not response.is_success
        assert response.data is None
        assert response.error_code is None
        assert response["anything"] is None

    def test_list_data(self):
        response = Response(200, {"success": True, "data": [1, 2]})
        assert response.data == [1, 2]
        assert response.get("key") is None
