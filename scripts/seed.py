from waman.core.config import settings
from waman.core.logging import setup_logging
from waman.db.session import engine, init_db
from waman.db.seed import seed_all
from sqlmodel import Session


def run_seed():
    setup_logging(settings.LOG_LEVEL)
    init_db()
    with Session(engine) as session:
        seed_all(
            session=session,
            seed_path=settings.SEED_PATH,
            admin_email=settings.ADMIN_EMAIL,
            admin_password=settings.ADMIN_PASSWORD,
        )


if __name__ == "__main__":
    run_seed()
