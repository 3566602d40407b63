"""
Tests for error classification
"""
import pytest

from multicard_sdk.errors import (
    AuthenticationError,
    CallbackTimeoutError,
    CardExpiredError,
    CardNotFoundError,
    DebitUnknownError,
    ErrorKind,
    InsufficientFundsError,
    InvalidFieldsError,
    MulticardError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
    error_class_for_status,
    error_from_response,
)


def envelope(code, details=None):
    return {"success": False, "error": {"code": code, "details": details}}


class TestBusinessCodes:
    """Tests for classification by ``error.code``."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("ERROR_CARD_NOT_FOUND", CardNotFoundError),
            ("ERROR_INSUFFICIENT_FUNDS", InsufficientFundsError),
            ("ERROR_CARD_EXPIRED", CardExpiredError),
            ("ERROR_DEBIT_UNKNOWN", DebitUnknownError),
            ("ERROR_CALLBACK_TIMEOUT", CallbackTimeoutError),
            ("ERROR_FIELDS", InvalidFieldsError),
        ],
    )
    def test_known_codes(self, code, expected):
        """Should map each business code to its error class."""
        error = error_from_response(400, envelope(code, "details"))
        assert type(error) is expected
        assert error.error_code == code

    def test_business_code_wins_over_status(self):
        """Should classify by code even when the status says otherwise."""
        error = error_from_response(500, envelope("ERROR_INSUFFICIENT_FUNDS", "Not enough money"))
        assert isinstance(error, InsufficientFundsError)
        assert error.kind is ErrorKind.INSUFFICIENT_FUNDS
        assert error.http_status == 500

    def test_invalid_fields_keeps_details_verbatim(self):
        details = {"amount": ["must be positive"], "store_id": ["is required"]}
        error = error_from_response(400, envelope("ERROR_FIELDS", details))

        assert isinstance(error, InvalidFieldsError)
        assert isinstance(error, ValidationError)
        assert error.error_details == details
        assert error.message == "Multicard API error (HTTP 400)"

    def test_string_details_become_message(self):
        error = error_from_response(402, envelope("ERROR_CARD_EXPIRED", "Card expired"))
        assert error.message == "Card expired"
        assert str(error) == "[ERROR_CARD_EXPIRED] Card expired"

    def test_unknown_code_falls_back_to_status(self):
        """Should use the status when the code is not recognised."""
        error = error_from_response(400, envelope("ERROR_SOMETHING_NEW", "Nope"))
        assert type(error) is ValidationError
        assert error.error_code == "ERROR_SOMETHING_NEW"


class TestStatusFallback:
    """Tests for classification by HTTP status."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (400, ValidationError),
            (401, AuthenticationError),
            (403, ValidationError),
            (404, NotFoundError),
            (422, ValidationError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
            (302, MulticardError),
        ],
    )
    def test_status_mapping(self, status, expected):
        assert error_class_for_status(status) is expected
        assert type(error_from_response(status, {})) is expected

    @pytest.mark.parametrize("body", [None, [], "oops", {"raw": "<html>"}, {"error": "flat"}])
    def test_non_envelope_bodies(self, body):
        """Should tolerate bodies that are not the error envelope."""
        error = error_from_response(502, body)
        assert isinstance(error, ServerError)
        assert error.error_code is None
        assert error.error_details is None
        assert error.response_body == body


class TestErrorPayload:
    """Tests for the shared error payload."""

    def test_retryable_flags(self):
        assert NetworkError.retryable
        assert RateLimitError.retryable
        assert ServerError.retryable
        assert not AuthenticationError.retryable
        assert not ValidationError.retryable
        assert not DebitUnknownError.retryable

    def test_default_message(self):
        assert MulticardError().message == "Multicard API error"
        assert str(NotFoundError(http_status=404)) == "Multicard API error (HTTP 404)"

    def test_to_dict(self):
        body = envelope("ERROR_CARD_NOT_FOUND", "No such card")
        error = error_from_response(404, body)

        assert error.to_dict() == {
            "error": {
                "kind": "card_not_found",
                "http_status": 404,
                "code": "ERROR_CARD_NOT_FOUND",
                "details": "No such card",
                "message": "No such card",
            }
        }
        assert error.response_body is body
