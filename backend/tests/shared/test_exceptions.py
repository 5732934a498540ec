"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    EcoChallengeError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    InternalError,
    ExternalServiceError,
)


class TestEcoChallengeError:
    def test_message(self):
        """EcoChallengeError should store message."""
        error = EcoChallengeError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """Code should default to the class name."""
        assert EcoChallengeError("Test error").code == "EcoChallengeError"
        assert NotFoundError("missing").code == "NotFoundError"

    def test_custom_code_and_details(self):
        error = EcoChallengeError("Test error", code="CUSTOM_ERROR", details={"key": "value"})
        assert error.code == "CUSTOM_ERROR"
        assert error.details == {"key": "value"}

    def test_to_dict(self):
        """to_dict should produce the API error body."""
        error = EcoChallengeError("Test error", code="TEST_ERROR", details={"key": "value"})
        assert error.to_dict() == {
            "error": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
        }

    def test_to_dict_minimal(self):
        result = EcoChallengeError("Test error").to_dict()
        assert result["details"] == {}


class TestCategories:
    def test_categories_inherit_base(self):
        """Every category should inherit from EcoChallengeError."""
        for cls in (NotFoundError, ValidationError, AuthenticationError, AuthorizationError, InternalError):
            assert isinstance(cls("x"), EcoChallengeError)

    def test_categories_are_distinct(self):
        """A validation error is not an authentication error and vice versa."""
        assert not isinstance(ValidationError("x"), AuthenticationError)
        assert not isinstance(AuthenticationError("x"), AuthorizationError)


class TestExternalServiceError:
    def test_is_internal_error(self):
        """External failures fall in the internal (500) category."""
        assert isinstance(ExternalServiceError("down", service="supabase"), InternalError)

    def test_includes_service_in_details(self):
        error = ExternalServiceError("Connection failed", service="supabase")
        assert error.service == "supabase"
        assert error.to_dict()["details"]["service"] == "supabase"

    def test_preserves_other_details(self):
        error = ExternalServiceError(
            "Connection failed",
            service="supabase",
            details={"status_code": 503},
        )
        assert error.to_dict()["details"] == {"status_code": 503, "service": "supabase"}

    def test_does_not_mutate_caller_details(self):
        details = {"table": "challenges"}
        ExternalServiceError("Connection failed", service="supabase", details=details)
        assert details == {"table": "challenges"}
