"""Unit tests for exception handlers in middleware.py.

Calls handlers directly to cover mappings that no endpoint currently triggers.
"""

import json
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel, ValidationError

from familytree.api.middleware import (
    familytree_exception_handler,
    validation_exception_handler,
)
from familytree.core.exceptions import (
    AuthenticationError,
    ConflictError,
    FamilyTreeException,
)


class _Payload(BaseModel):
    year: int


@pytest.mark.asyncio
async def test_authentication_error_returns_401():
    response = await familytree_exception_handler(MagicMock(), AuthenticationError("no session"))
    assert response.status_code == 401
    assert json.loads(response.body) == {"detail": "no session"}


@pytest.mark.asyncio
async def test_conflict_error_returns_409():
    response = await familytree_exception_handler(MagicMock(), ConflictError("taken"))
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_unmapped_exception_returns_500_without_detail():
    response = await familytree_exception_handler(MagicMock(), FamilyTreeException("secret"))
    assert response.status_code == 500
    assert b"secret" not in response.body


@pytest.mark.asyncio
async def test_validation_error_returns_400_with_field_errors():
    with pytest.raises(ValidationError) as exc_info:
        _Payload(year="soon")

    response = await validation_exception_handler(MagicMock(), exc_info.value)

    assert response.status_code == 400
    body = json.loads(response.body)
    assert body["detail"] == "Invalid request"
    assert list(body["errors"][0]) == ["year"]
