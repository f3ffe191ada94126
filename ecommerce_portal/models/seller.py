from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ecommerce_portal.core.database import Base


class Seller(Base):
    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    contact_number = Column(String(32), nullable=True)
    address = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    version_id = Column(Integer, nullable=False, default=1)

    user = relationship("User", lazy="joined")
    shops = relationship("Shop", back_populates="seller")

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def active(self) -> bool:
        # Activation lives on the linked user
        return bool(self.user and self.user.active)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
