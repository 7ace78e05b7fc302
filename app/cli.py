"""
Operator entry point. Run from the project root:

  ecom-account-service serve
  ecom-account-service migrate [--test]
  ecom-account-service delete-user EMAIL
"""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from alembic import command
from alembic.config import Config

from app.core.config import get_settings
from app.errors import DomainError

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"

logger = logging.getLogger(__name__)


def serve() -> int:
    settings = get_settings()
    logger.info("Listening on %s:%s", settings.bind_host, settings.bind_port)
    uvicorn.run("app.main:app", host=settings.bind_host, port=settings.bind_port)
    return 0


def migrate(test: bool = False) -> int:
    """Upgrade the main (or test) database schema to the latest revision."""
    settings = get_settings()
    alembic_cfg = Config(str(ALEMBIC_INI))
    if test:
        alembic_cfg.set_main_option("sqlalchemy.url", settings.test_database_url)
    command.upgrade(alembic_cfg, "head")
    return 0


def delete_user(email: str) -> int:
    """Remove a user and, by cascade, its session."""
    from app.db.base import SessionLocal
    from app.repositories.user import delete_user as delete_user_row

    db = SessionLocal()
    try:
        delete_user_row(db, email)
    except DomainError as e:
        logger.error("Could not delete user %s: %s", email, e)
        return 1
    finally:
        db.close()
    logger.info("Deleted user %s", email)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="E-commerce account service.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Run the HTTP server on the configured address")

    migrate_parser = subparsers.add_parser("migrate", help="Apply database migrations")
    migrate_parser.add_argument(
        "--test", action="store_true", help="Migrate the test database instead"
    )

    delete_parser = subparsers.add_parser("delete-user", help="Delete a user and its session")
    delete_parser.add_argument("email")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if args.command == "serve":
        return serve()
    if args.command == "migrate":
        return migrate(test=args.test)
    return delete_user(args.email)


if __name__ == "__main__":
    sys.exit(main())
