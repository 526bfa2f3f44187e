# ============================================================================
# FILE: catalog_api/db/base.py
# ============================================================================
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
