"""Unit tests for the argon2id password adapter."""

from __future__ import annotations

import pytest
from argon2 import PasswordHasher

from authapi.domain.value_objects import PasswordHash, PlaintextPassword
from authapi.infra.crypto.argon2_password_service import Argon2PasswordService


@pytest.fixture(scope="module")
def service() -> Argon2PasswordService:
    # Cheap parameters keep the suite fast; the format is unchanged.
    return Argon2PasswordService(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


def test_hash_produces_argon2id_phc_string(service):
    hashed = service.hash(PlaintextPassword("Correct#Horse1"))
    assert isinstance(hashed, PasswordHash)
    assert hashed.value.startswith("$argon2id$")
    assert "Correct#Horse1" not in hashed.value


def test_same_password_hashes_differently(service):
    password = PlaintextPassword("Correct#Horse1")
    assert service.hash(password).value != service.hash(password).value


def test_compare_accepts_matching_password(service):
    hashed = service.hash(PlaintextPassword("Correct#Horse1"))
    assert service.compare("Correct#Horse1", hashed) is True
    assert service.compare(PlaintextPassword("Correct#Horse1"), hashed.value) is True


def test_compare_rejects_wrong_password(service):
    hashed = service.hash(PlaintextPassword("Correct#Horse1"))
    assert service.compare("correct#horse1", hashed) is False


@pytest.mark.parametrize("stored", ["not-a-hash", "$argon2id$garbage", ""])
def test_compare_is_fail_closed_on_malformed_hash(service, stored):
    assert service.compare("Correct#Horse1", stored) is False


def test_compare_rejects_non_string_input(service):
    hashed = service.hash(PlaintextPassword("Correct#Horse1"))
    assert service.compare(None, hashed) is False  # type: ignore[arg-type]
