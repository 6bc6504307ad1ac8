# storefront/repos/base.py
from sqlalchemy.orm import Session


class BaseRepo:
    """Repozytoria nie commitują same - granice transakcji ustala serwis."""

    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
