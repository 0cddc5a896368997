"""Error taxonomy — every kind has a fixed status and a safe public message."""

import pytest

from beesides.core.errors import (
    BeesidesError, ErrorKind, MetadataProviderError, NotFoundError,
    PersistenceError, UnauthorizedError, UnexpectedError, ValidationFailedError,
)


def test_unauthorized_is_401_with_fixed_message():
    err = UnauthorizedError()
    assert err.kind is ErrorKind.UNAUTHORIZED
    assert err.http_status == 401
    assert err.to_response() == {"success": False, "error": "Unauthorized access"}


def test_validation_names_field():
    err = ValidationFailedError("Collection name is required", "name")
    assert err.http_status == 400
    assert err.field == "name"
    assert err.kind is ErrorKind.VALIDATION


def test_not_found_default_message():
    err = NotFoundError("Release")
    assert err.http_status == 404
    assert err.message == "Release not found"


def test_persistence_error_exposes_upstream_detail():
    err = PersistenceError("duplicate key value", "save rating")
    assert err.kind is ErrorKind.UPSTREAM
    assert err.http_status == 400
    assert err.message == "Failed to save rating: duplicate key value"


def test_metadata_error_hides_upstream_detail():
    err = MetadataProviderError("MusicBrainz API error: 503")
    assert err.http_status == 500
    assert err.message == "Failed to search for albums"
    assert "503" not in err.to_response()["error"]
    assert err.detail == "MusicBrainz API error: 503"


def test_unexpected_error_is_generic():
    err = UnexpectedError(detail="KeyError: 'id'")
    assert err.http_status == 500
    assert err.message == "An unexpected error occurred"


@pytest.mark.parametrize("error", [
    UnauthorizedError(),
    ValidationFailedError("bad", "x"),
    NotFoundError("Review"),
    PersistenceError("boom", "delete review"),
    MetadataProviderError("boom"),
    UnexpectedError(),
])
def test_all_errors_share_the_base(error):
    assert isinstance(error, BeesidesError)
    assert error.to_response()["success"] is False
