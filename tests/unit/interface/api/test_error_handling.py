"""Unit tests for error translation and bearer token extraction."""

import json
from unittest.mock import MagicMock

import pytest

from unid.domain.error import (
    AuthFailedError,
    ConflictError,
    DomainError,
    InvalidClaimError,
    LastMethodError,
    NotFoundError,
    SameIdentityError,
    UnauthorizedError,
    ValidationError,
)
from unid.interface.api.security import bearer_token
from unid.interface.error import domain_error_handler, status_for


class TestStatusFor:
    """Tests for status_for function."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ValidationError("bad"), 400),
            (InvalidClaimError("bad token"), 401),
            (AuthFailedError(), 401),
            (UnauthorizedError("not a party"), 403),
            (NotFoundError("Identity", "x"), 404),
            (SameIdentityError("x"), 409),
            (ConflictError("authentication method"), 409),
            (LastMethodError("x"), 409),
        ],
    )
    def test_maps_each_error_kind(self, error, expected):
        assert status_for(error) == expected

    def test_unmapped_domain_error_is_bad_request(self):
        class OddError(DomainError):
            kind = "odd"

        assert status_for(OddError("odd")) == 400


class TestBearerToken:
    """Tests for bearer_token dependency."""

    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic abc"])
    def test_missing_or_malformed_header(self, header):
        with pytest.raises(InvalidClaimError):
            bearer_token(header)


class TestDomainErrorHandler:
    """Tests for domain_error_handler."""

    @pytest.mark.asyncio
    async def test_renders_kind_and_detail(self):
        request = MagicMock()
        request.method = "POST"
        request.url.path = "/identity/unbind"

        response = await domain_error_handler(request, LastMethodError("x"))

        assert response.status_code == 409
        assert json.loads(response.body) == {
            "error": "last_method",
            "detail": str(LastMethodError("x")),
        }
