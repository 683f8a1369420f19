#!/usr/bin/env python
"""Seed campsites (and optionally users) from a JSON fixture.

The fixture is a JSON object with ``campsites`` and optional ``users`` arrays.
Records without an ``id`` (or the legacy ``_id``) get a freshly generated
identifier; records with an id are merged so the script can be re-run.

Usage:
    python -m campsite_api.scripts.seed_campsites ./data/fixtures/campsites.json
    python -m campsite_api.scripts.seed_campsites ./data/fixtures/campsites.json --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campsite_api.db.connection import get_session
from campsite_api.db.models import Campsite, User
from campsite_api.utils.identifiers import new_object_id, normalize_object_id

logger = logging.getLogger(__name__)


def _resolve_id(data: dict[str, Any]) -> str | None:
    """Return the record id, generating one when absent; ``None`` if malformed."""

    raw = data.get("id") or data.get("_id")
    if raw is None:
        return new_object_id()
    return normalize_object_id(raw)


def build_campsite(data: dict[str, Any]) -> Campsite | None:
    """Map a fixture record onto a :class:`Campsite`; ``None`` when unusable."""

    campsite_id = _resolve_id(data)
    name = (data.get("name") or "").strip()
    description = (data.get("description") or "").strip()
    if campsite_id is None or not name or not description:
        return None

    return Campsite(
        id=campsite_id,
        name=name,
        description=description,
        image=data.get("image"),
        elevation=data.get("elevation"),
        cost=data.get("cost"),
        featured=bool(data.get("featured", False)),
    )


def build_user(data: dict[str, Any]) -> User | None:
    """Map a fixture record onto a :class:`User`; ``None`` when unusable."""

    user_id = _resolve_id(data)
    username = (data.get("username") or "").strip()
    if user_id is None or not username:
        return None

    return User(
        id=user_id,
        username=username,
        first_name=data.get("first_name") or data.get("firstname"),
        last_name=data.get("last_name") or data.get("lastname"),
        admin=bool(data.get("admin", False)),
    )


async def seed_records(
    session: AsyncSession,
    payload: dict[str, Any],
    *,
    dry_run: bool = False,
) -> tuple[int, int]:
    """Merge fixture records into the session.

    Returns:
        Tuple of (loaded_count, skipped_count)
    """

    loaded_count = 0
    skipped_count = 0

    for kind, builder in (("users", build_user), ("campsites", build_campsite)):
        for index, data in enumerate(payload.get(kind, [])):
            record = builder(data) if isinstance(data, dict) else None
            if record is None:
                logger.warning("Skipping %s[%d]: missing or malformed fields", kind, index)
                skipped_count += 1
                continue
            if not dry_run:
                await session.merge(record)
            loaded_count += 1

    if not dry_run:
        await session.commit()
    return loaded_count, skipped_count


async def seed_from_file(path: Path, *, dry_run: bool = False) -> tuple[int, int]:
    """Load ``path`` and seed its records through a fresh session."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        payload = {"campsites": payload}

    async with get_session() as session:
        return await seed_records(session, payload, dry_run=dry_run)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""

    from campsite_api.main import validate_environment

    validate_environment()

    parser = argparse.ArgumentParser(description="Seed campsites and users from JSON")
    parser.add_argument(
        "json_path",
        nargs="?",
        type=Path,
        default=Path("./data/fixtures/campsites.json"),
        help="Path to JSON fixture (default: ./data/fixtures/campsites.json)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the fixture without writing to the database",
    )
    args = parser.parse_args(argv)

    if not args.json_path.exists():
        print(f"❌ File not found: {args.json_path}", file=sys.stderr)
        return 1

    loaded, skipped = asyncio.run(seed_from_file(args.json_path, dry_run=args.dry_run))
    verb = "Validated" if args.dry_run else "Loaded"
    print(f"✓ {verb} {loaded} record(s), skipped {skipped}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
