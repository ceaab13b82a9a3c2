"""
Create all tables directly from the models (local development only).

Production databases are managed with Alembic, see app/db/migrate.py.
"""
from app.db.session import engine
from app.db.base import Base
import app.db.models  # noqa: F401


def init_db():
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    init_db()
