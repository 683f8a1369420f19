"""Tests for the 24-character record identifier helpers."""

from __future__ import annotations

import pytest

from campsite_api.utils.identifiers import (
    OBJECT_ID_LENGTH,
    is_valid_object_id,
    new_object_id,
    normalize_object_id,
)


@pytest.mark.parametrize(
    "value",
    ["65a1f0c2e4b0a1b2c3d4e5f6", "65A1F0C2E4B0A1B2C3D4E5F6"],
)
def test_accepts_hex_identifiers(value: str) -> None:
    assert is_valid_object_id(value)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "65a1f0c2e4b0a1b2c3d4e5f",
        "65a1f0c2e4b0a1b2c3d4e5f6a",
        "65a1f0c2e4b0a1b2c3d4e5gz",
        " 65a1f0c2e4b0a1b2c3d4e5f",
        "65a1f0c2e4b0a1b2c3d4e5f6\n",
        None,
        12345,
    ],
)
def test_rejects_malformed_identifiers(value: object) -> None:
    assert not is_valid_object_id(value)


def test_new_identifiers_are_valid_and_distinct() -> None:
    generated = [new_object_id() for _ in range(500)]

    assert all(len(value) == OBJECT_ID_LENGTH for value in generated)
    assert all(is_valid_object_id(value) for value in generated)
    assert len(set(generated)) == len(generated)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("65A1F0C2E4B0A1B2C3D4E5F6", "65a1f0c2e4b0a1b2c3d4e5f6"),
        ("  65a1f0c2e4b0a1b2c3d4e5f6\n", "65a1f0c2e4b0a1b2c3d4e5f6"),
        ("65a1f0c2e4b0a1b2c3d4e5f", None),
        ("65a1f0c2 e4b0a1b2c3d4e5f6", None),
        (None, None),
    ],
)
def test_normalize_object_id(value: object, expected: str | None) -> None:
    assert normalize_object_id(value) == expected
