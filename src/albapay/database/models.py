from sqlalchemy import Column, Integer, String, Date, Numeric, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from .db import Base


class WorkplaceDB(Base):
    """Workplace database model"""
    __tablename__ = "workplaces"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    color = Column(String(16))
    hourly_wage = Column(Numeric(12, 2), nullable=False, default=0)

    # Break policy
    break_type = Column(String(20), default='none')
    break_every_hours = Column(Numeric(5, 2), default=0)
    break_minutes_per_block = Column(Integer, default=0)

    # 'withholding3_3', 'four_insurance', 'unknown'
    tax_type = Column(String(20), default='unknown')

    # Allowance and insurance settings stored as JSON
    settings_json = Column(Text, nullable=False, default='{}')
    insurance_json = Column(Text, nullable=False, default='{}')

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    shifts = relationship("ShiftDB", back_populates="workplace", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Workplace(id={self.id}, name={self.name})>"


class ShiftDB(Base):
    """Shift database model"""
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    workplace_id = Column(String, ForeignKey('workplaces.id'), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    memo = Column(Text, default='')
    is_holiday = Column(Boolean, nullable=True)

    # 'manual', 'image', 'calendar'
    source = Column(String(20), default='manual')

    created_at = Column(DateTime, default=datetime.utcnow)

    workplace = relationship("WorkplaceDB", back_populates="shifts")

    def __repr__(self):
        return f"<Shift(id={self.id}, workplace={self.workplace_id}, date={self.date})>"
