from sqlalchemy import delete, insert
from sqlalchemy.orm import Session


class BackupRepository:
    """Whole-table reads and writes used by backup and restore"""

    def __init__(self, db: Session):
        self.db = db

    def fetch_all(self, model) -> list:
        return self.db.query(model).order_by(model.id).all()

    def delete_all(self, model) -> None:
        """Delete every row of the table; caller commits"""
        self.db.execute(delete(model))

    def insert_many(self, model, rows: list[dict]) -> None:
        """Bulk insert rows keyed by attribute name; caller commits"""
        self.db.execute(insert(model), rows)
