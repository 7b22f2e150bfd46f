from typing import Any

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class TourModel(Base):
    __tablename__ = 'tour'

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    # price table, group bounds and available_dates with their slot counters
    document: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)

    def __repr__(self):
        return f'<TourModel(id={self.id}, title={self.title})>'
