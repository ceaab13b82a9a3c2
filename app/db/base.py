from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

# Stable constraint names so Alembic autogenerate produces the same names on every backend
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))

# Note: Models are registered by importing app.db.models (see init_db and alembic/env.py)
# All models must import Base from this module
