"""
Database initialization for fresh installs.

Creates the database and its owner role if missing, brings the schema to the
latest Alembic revision and seeds a starter skill catalog. Idempotent - safe
to run multiple times.

Usage:
    python -m skillmatch.scripts.init_db [--no-seed] [--alembic-ini PATH]

Environment variables:
    PG_ADMIN_USER / PG_ADMIN_PASSWORD   role allowed to CREATE DATABASE
                                        (defaults to DB_USER / DB_PASSWORD)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import asyncpg
from alembic import command
from alembic.config import Config
from alembic.util import CommandError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from skillmatch.config import Settings, get_settings
from skillmatch.database import Database
from skillmatch.models.skill import Skill

logger = logging.getLogger(__name__)

# alembic.ini lives at the project root, next to the skillmatch package
DEFAULT_ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"

SEED_SKILLS = [
    ("Python", "Programming", "Backend and scripting development"),
    ("JavaScript", "Programming", "Frontend and Node.js development"),
    ("SQL", "Data", "Relational modelling and querying"),
    ("React", "Frontend", "Component-based UI development"),
    ("Docker", "DevOps", "Container packaging and runtime"),
    ("AWS", "Cloud", "Amazon Web Services infrastructure"),
    ("Project Management", "Management", "Planning, tracking and delivery"),
    ("UI/UX Design", "Design", "Interaction and visual design"),
]


async def get_admin_conn(settings: Settings) -> asyncpg.Connection:
    """Connect to the default 'postgres' database with admin credentials."""
    return await asyncpg.connect(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.pg_admin_user or settings.db_user,
        password=settings.pg_admin_password or settings.db_password,
        database="postgres",
    )


async def ensure_database_exists(settings: Settings) -> bool:
    """Create database and user if they don't exist. Returns True if created."""
    db_name, db_user = settings.db_name, settings.db_user
    conn = await get_admin_conn(settings)
    try:
        exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name)
        if exists:
            logger.info("Database '%s' already exists", db_name)
            return False

        user_exists = await conn.fetchval("SELECT 1 FROM pg_roles WHERE rolname = $1", db_user)
        if not user_exists:
            safe_pw = settings.db_password.replace("'", "''")
            await conn.execute(f"CREATE USER \"{db_user}\" WITH PASSWORD '{safe_pw}'")
            logger.info("Created user '%s'", db_user)

        await conn.execute(f'CREATE DATABASE "{db_name}" OWNER "{db_user}"')
        await conn.execute(f'GRANT ALL PRIVILEGES ON DATABASE "{db_name}" TO "{db_user}"')
        logger.info("Created database '%s'", db_name)
        return True
    finally:
        await conn.close()


def alembic_config(ini_path: Path = DEFAULT_ALEMBIC_INI) -> Config:
    """Alembic config resolved against the ini file's directory, not the cwd."""
    cfg = Config(str(ini_path))
    cfg.set_main_option("script_location", str(ini_path.parent / "alembic"))
    # Keep this script's logging setup; env.py would otherwise reload alembic.ini's
    cfg.attributes["configure_logger"] = False
    return cfg


def upgrade_schema(cfg: Config) -> None:
    """Apply every pending migration. Must run outside an event loop (env.py owns one)."""
    command.upgrade(cfg, "head")
    logger.info("Schema is at the latest revision")


async def seed_skills(database: Database) -> int:
    """Insert the starter skills that are not present yet. Returns the number added."""
    async with database.session() as session:
        result = await session.execute(select(Skill.name))
        existing = set(result.scalars().all())
        added = 0
        for name, category, description in SEED_SKILLS:
            if name not in existing:
                session.add(Skill(name=name, category=category, description=description))
                added += 1
    return added


async def seed_database(settings: Settings) -> int:
    database = Database(settings)
    try:
        added = await seed_skills(database)
        logger.info("Seeded %d skill(s)", added)
        return added
    finally:
        await database.close()


def init_db(settings: Settings, cfg: Config, seed: bool = True) -> None:
    if not settings.database_url:
        asyncio.run(ensure_database_exists(settings))

    upgrade_schema(cfg)

    if seed:
        asyncio.run(seed_database(settings))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create, migrate and seed the SkillMatch database")
    parser.add_argument("--no-seed", action="store_true", help="skip the starter skill catalog")
    parser.add_argument(
        "--alembic-ini", type=Path, default=DEFAULT_ALEMBIC_INI, help="path to alembic.ini"
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(message)s")

    try:
        init_db(settings, alembic_config(args.alembic_ini), seed=not args.no_seed)
    except (OSError, asyncpg.PostgresError, SQLAlchemyError, CommandError) as exc:
        logger.error("Database initialization failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
