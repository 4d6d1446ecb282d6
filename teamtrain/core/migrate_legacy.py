"""
Import data from the old flat-file deployment.

Reads users.json, invites.json, exercises.json and trainings.json from a data
directory and inserts every record that is not already present (matched by
id). Ids, password hashes, timestamps and invite usage are preserved. A record
that fails to insert is logged and skipped.

Usage: teamtrain-migrate path/to/data
"""
import argparse
import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from teamtrain.core.base import utcnow
from teamtrain.core.logging_config import setup_logging
from teamtrain.models.exercise import Exercise
from teamtrain.models.invite import Invite
from teamtrain.models.training import Training
from teamtrain.models.user import User, RoleEnum

logger = logging.getLogger(__name__)


def read_json(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    return json.loads(path.read_text(encoding="utf-8"))


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 (JavaScript ``toISOString``) to naive UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def user_from_record(record: dict) -> User:
    return User(
        id=str(record["id"]),
        name=record["name"],
        email=record["email"].strip().lower(),
        password=record["password"],
        role=RoleEnum(record.get("role") or "user"),
        created_at=parse_timestamp(record.get("createdAt")) or utcnow(),
    )


def invite_from_record(record: dict) -> Invite:
    return Invite(
        id=str(record["id"]),
        code=record["code"],
        created_by=str(record["createdBy"]),
        used_by=str(record["usedBy"]) if record.get("usedBy") else None,
        used_at=parse_timestamp(record.get("usedAt")),
        created_at=parse_timestamp(record.get("createdAt")) or utcnow(),
    )


def exercise_from_record(record: dict) -> Exercise:
    return Exercise(
        id=str(record["id"]),
        name=record["name"],
        description=record.get("description") or "",
        images=record.get("images") or [],
        video=record.get("video"),
        youtube_url=record.get("youtubeUrl"),
        created_at=parse_timestamp(record.get("createdAt")) or utcnow(),
    )


def training_from_record(record: dict) -> Training:
    return Training(
        id=str(record["id"]),
        date=record["date"],
        time=record["time"],
        location=record.get("location") or "",
        description=record.get("description") or "",
        exercise_ids=[str(exercise_id) for exercise_id in record.get("exerciseIds") or []],
        created_at=parse_timestamp(record.get("createdAt")) or utcnow(),
    )


COLLECTIONS = [
    ("users.json", User, user_from_record),
    ("invites.json", Invite, invite_from_record),
    ("exercises.json", Exercise, exercise_from_record),
    ("trainings.json", Training, training_from_record),
]


async def migrate_collection(
    session_factory: async_sessionmaker,
    records: List[dict],
    model,
    build: Callable[[dict], Any],
) -> int:
    created = 0
    async with session_factory() as db:
        for record in records:
            try:
                if await db.get(model, str(record["id"])) is not None:
                    continue
                db.add(build(record))
                await db.commit()
                created += 1
            except (KeyError, ValueError, SQLAlchemyError) as e:
                await db.rollback()
                logger.error("Skipping %s record %s: %s", model.__tablename__, record.get("id"), e)
    return created


async def migrate(data_dir: Path, session_factory: async_sessionmaker) -> Dict[str, int]:
    """Import every collection found in ``data_dir``. Returns created counts per table."""
    counts = {}
    for filename, model, build in COLLECTIONS:
        records = read_json(data_dir / filename)
        logger.info("Migrating %d records from %s", len(records), filename)
        counts[model.__tablename__] = await migrate_collection(session_factory, records, model, build)
    logger.info("Migration finished: %s", counts)
    return counts


async def run(data_dir: Path) -> Dict[str, int]:
    from teamtrain.core.database import init_database
    from teamtrain.core.db import AsyncSessionLocal, engine

    await init_database()
    try:
        return await migrate(data_dir, AsyncSessionLocal)
    finally:
        await engine.dispose()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Import legacy JSON data into the database")
    parser.add_argument("data_dir", type=Path, help="directory holding the legacy *.json files")
    args = parser.parse_args(argv)

    setup_logging()
    asyncio.run(run(args.data_dir))


if __name__ == "__main__":
    main()
