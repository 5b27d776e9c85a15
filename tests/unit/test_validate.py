"""
Unit tests for version validation, types and errors.

Tests cover:
- Required publish fields
- Maturity parsing
- AppRef parsing
- Error codes and messages
"""

import pytest

from appstore_sdk.errors import (
    AppStoreError,
    AuthenticationError,
    MissingHistoryError,
    TargetVersionNotFoundError,
    TransportError,
    ValidationError,
    VersionConflictError,
)
from appstore_sdk.types import AppRef, Maturity
from appstore_sdk.validate import ensure_publishable, validate_version


class TestValidateVersion:
    """Tests for validate_version and ensure_publishable."""

    def test_valid_version(self):
        """A complete payload passes."""
        is_valid, errors = validate_version(
            {"name": "r1.0.2", "dockerTag": "latest", "maturity": "stable"}
        )

        assert is_valid
        assert errors == []

    def test_all_missing_fields_reported(self):
        """Every missing required field is listed."""
        is_valid, errors = validate_version({"changelog": "x"})

        assert not is_valid
        assert len(errors) == 3

    def test_empty_string_counts_as_missing(self):
        """Empty values do not satisfy a required field."""
        is_valid, errors = validate_version({"name": "", "dockerTag": "t", "maturity": "beta"})

        assert not is_valid
        assert "'name' is required" in errors[0]

    def test_suggests_misspelled_key(self):
        """A near-miss key is suggested."""
        _, errors = validate_version({"name": "r1", "docker_tag": "t", "maturity": "beta"})

        assert "docker_tag" in errors[0]

    def test_invalid_maturity(self):
        """Unknown maturities are rejected."""
        is_valid, errors = validate_version({"name": "r1", "dockerTag": "t", "maturity": "gamma"})

        assert not is_valid
        assert "gamma" in errors[0]

    def test_ensure_publishable_raises(self):
        """ensure_publishable raises with all errors attached."""
        with pytest.raises(ValidationError) as exc_info:
            ensure_publishable({"name": "r1"})

        assert len(exc_info.value.errors) == 2

    def test_ensure_publishable_normalizes_maturity(self):
        """Enum maturities become plain strings, input untouched."""
        payload = {"name": "r1", "dockerTag": "t", "maturity": Maturity.BETA}

        version = ensure_publishable(payload)

        assert version["maturity"] == "beta"
        assert type(version["maturity"]) is str
        assert payload["maturity"] is Maturity.BETA


class TestTypes:
    """Tests for Maturity and AppRef."""

    def test_maturity_parse(self):
        """Strings and members parse to members."""
        assert Maturity.parse("alpha") is Maturity.ALPHA
        assert Maturity.parse(Maturity.STABLE) is Maturity.STABLE
        assert str(Maturity.BETA) == "beta"

    def test_maturity_parse_invalid(self):
        """Unknown values raise ValidationError."""
        with pytest.raises(ValidationError, match="expected one of alpha, beta, stable"):
            Maturity.parse("nightly")

    def test_app_ref_docker_image(self):
        """Vendor and app join into the docker image name."""
        assert AppRef(vendor="sicon", app="backend").docker_image == "sicon/backend"

    def test_app_ref_parse(self):
        """Docker image names split back into vendor and app."""
        assert AppRef.parse("sicon/backend") == AppRef("sicon", "backend")

    @pytest.mark.parametrize("value", ["backend", "/backend", "sicon/", "a/b/c"])
    def test_app_ref_parse_invalid(self, value):
        """Anything but <vendor>/<app> is rejected."""
        with pytest.raises(ValidationError):
            AppRef.parse(value)


class TestErrors:
    """Tests for error types."""

    def test_all_inherit_from_base(self):
        """Every SDK error is an AppStoreError."""
        for error in (
            TransportError("x"),
            AuthenticationError("x"),
            VersionConflictError("r1", "a/b"),
            MissingHistoryError("a/b", "alpha"),
            TargetVersionNotFoundError("r1"),
        ):
            assert isinstance(error, AppStoreError)

    def test_authentication_is_transport_error(self):
        """Login failures are recoverable transport failures."""
        error = AuthenticationError("denied", status_code=400)

        assert isinstance(error, TransportError)
        assert error.code == "AUTHENTICATION_ERROR"
        assert error.details["status_code"] == 400

    def test_conflict_message_names_version_and_app(self):
        error = VersionConflictError("r1.0.0", "sicon/backend")

        assert "r1.0.0" in str(error)
        assert "sicon/backend" in str(error)
        assert error.code == "VERSION_CONFLICT"

    def test_missing_history_message(self):
        error = MissingHistoryError("sicon/backend", "alpha")

        assert str(error) == 'No history found for app "sicon/backend" channel "alpha". aborting.'

    def test_target_not_found_message(self):
        error = TargetVersionNotFoundError("r1.0.0")

        assert "r1.0.0 does not exist" in str(error)
        assert error.code == "TARGET_NOT_FOUND"
