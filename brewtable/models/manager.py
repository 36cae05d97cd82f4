from sqlalchemy import Column, String, DateTime, func, Integer, Text
from brewtable.db.session import Base

class Manager(Base):
    __tablename__ = "managers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    location_ids = Column(Text, nullable=False, default="")  # "1,3"; empty = every location
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def can_manage(self, location_id: int) -> bool:
        allowed = [p.strip() for p in (self.location_ids or "").split(",") if p.strip()]
        return not allowed or str(location_id) in allowed
