"""Bootstrap script: `python -m app.initial_data` after the migrations have run."""

from loguru import logger
from sqlmodel import Session

from app.database.database import engine, create_db_and_tables
from app.database.init_db import init_db


def init() -> None:
    """Create any missing table, then the first administrator and the sample items."""
    create_db_and_tables()
    with Session(engine) as session:
        init_db(session)


def main() -> None:
    logger.info("Seeding the Hearty database")
    init()
    logger.info("Hearty database ready")


if __name__ == "__main__":
    main()
