"""Shared fixtures for the matrix-notify tests."""

from __future__ import annotations

import pytest

from fake_matrix import FakeMatrix, FakeSession
from matrix_notify.api.client import MatrixClient


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> MatrixClient:
    return MatrixClient(session=session, timeout=5.0)  # type: ignore[arg-type]


@pytest.fixture
def matrix(session: FakeSession) -> FakeMatrix:
    return FakeMatrix(session)
