from sqlalchemy import Column, Integer, String, DateTime, Float
from datetime import datetime
from db.database import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, index=True, nullable=False)

    tenant = Column(String, nullable=False)   # free-text label, not multi-tenancy
    amount = Column(Float, nullable=False)

    # local wall-clock time; the day grouping key is derived from it
    created_at = Column(DateTime, default=datetime.now, index=True, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    def __repr__(self):
        return f"<Expense id={self.id} user_id={self.user_id} tenant={self.tenant!r} amount={self.amount}>"
