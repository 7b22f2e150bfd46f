from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class UserModel(Base):
    __tablename__ = 'tour_user'

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default='', index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    phone: Mapped[str] = mapped_column(String(32), nullable=False, default='')
    address: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    role: Mapped[str] = mapped_column(String(20), default='user', nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<UserModel(id={self.id}, email={self.email}, role={self.role})>'
