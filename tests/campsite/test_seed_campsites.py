"""Tests for the JSON fixture seeding script."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from campsite_api.db.models import Campsite, User
from campsite_api.scripts import seed_campsites
from campsite_api.scripts.seed_campsites import build_campsite, build_user, seed_records
from campsite_api.utils.identifiers import is_valid_object_id
from tests.campsite.support.ids import CAMP_LAKE_ID


def _payload() -> dict[str, list[dict[str, object]]]:
    return {
        "users": [
            {"_id": "65a1f0c2e4b0a1b2c3d4e600", "username": "carol", "firstname": "Carol"},
            {"username": ""},
        ],
        "campsites": [
            {
                "_id": "65a1f0c2e4b0a1b2c3d4aa10",
                "name": "Breadcrumb Trail Campground",
                "description": "Hike-in sites beside the falls.",
                "elevation": 2901,
                "cost": 25,
                "featured": True,
            },
            {"name": "Nameless Flats", "description": "Open meadow sites."},
            {"id": "not-hex", "name": "Broken", "description": "Bad id."},
        ],
    }


def test_build_campsite_generates_missing_identifier() -> None:
    campsite = build_campsite({"name": " Pine Bluff ", "description": "Shade."})

    assert campsite is not None
    assert is_valid_object_id(campsite.id)
    assert campsite.name == "Pine Bluff"
    assert campsite.featured is False


def test_build_campsite_rejects_incomplete_records() -> None:
    assert build_campsite({"name": "No description"}) is None
    assert build_campsite({"_id": "xyz", "name": "A", "description": "B"}) is None


def test_build_user_accepts_legacy_name_fields() -> None:
    user = build_user(
        {"_id": "65a1f0c2e4b0a1b2c3d4e600", "username": "carol", "lastname": "Diaz"}
    )

    assert user is not None
    assert user.id == "65a1f0c2e4b0a1b2c3d4e600"
    assert user.last_name == "Diaz"
    assert user.admin is False


@pytest.mark.asyncio
async def test_seed_records_merges_and_counts(session: AsyncSession) -> None:
    loaded, skipped = await seed_records(session, _payload())

    assert (loaded, skipped) == (3, 2)
    campsites = (await session.execute(select(func.count()).select_from(Campsite))).scalar_one()
    users = (await session.execute(select(func.count()).select_from(User))).scalar_one()
    assert campsites == 2
    assert users == 1

    # Re-running the same fixture merges instead of duplicating.
    payload = _payload()
    payload["campsites"] = payload["campsites"][:1]
    await seed_records(session, payload)
    campsites = (await session.execute(select(func.count()).select_from(Campsite))).scalar_one()
    assert campsites == 2


@pytest.mark.asyncio
async def test_seed_records_dry_run_writes_nothing(session: AsyncSession) -> None:
    loaded, skipped = await seed_records(session, _payload(), dry_run=True)

    assert (loaded, skipped) == (3, 2)
    count = (await session.execute(select(func.count()).select_from(Campsite))).scalar_one()
    assert count == 0


def test_main_reports_missing_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("campsite_api.main.validate_environment", lambda: None)

    exit_code = seed_campsites.main([str(tmp_path / "absent.json")])

    assert exit_code == 1
    assert "File not found" in capsys.readouterr().err


def test_main_dry_run_accepts_bare_list(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    fixture = tmp_path / "campsites.json"
    fixture.write_text(
        json.dumps([{"_id": CAMP_LAKE_ID, "name": "Lake", "description": "Shore."}]),
        encoding="utf-8",
    )
    seen: dict[str, object] = {}

    async def _fake_seed_from_file(path: Path, *, dry_run: bool) -> tuple[int, int]:
        seen["path"] = path
        seen["dry_run"] = dry_run
        return 1, 0

    monkeypatch.setattr("campsite_api.main.validate_environment", lambda: None)
    monkeypatch.setattr(seed_campsites, "seed_from_file", _fake_seed_from_file)

    exit_code = seed_campsites.main([str(fixture), "--dry-run"])

    assert exit_code == 0
    assert seen == {"path": fixture, "dry_run": True}
    assert "Validated 1 record(s), skipped 0" in capsys.readouterr().out
