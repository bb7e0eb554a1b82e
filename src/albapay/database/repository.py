from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import List, Optional
from datetime import date
from dataclasses import replace
import json
import logging
import uuid
from .models import WorkplaceDB, ShiftDB
from albapay.models.shift import Shift
from albapay.models.workplace import WorkplaceConfig

logger = logging.getLogger(__name__)


class ShiftRepository:
    """Repository for workplaces and their shifts.

    Reads return domain snapshots, never live ORM rows, so the wage engine
    works on data that cannot change under it.
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    # ========== Workplace Operations ==========

    def save_workplace(self, workplace: WorkplaceConfig) -> WorkplaceConfig:
        """Insert or update a workplace; a missing id is generated"""
        if not workplace.id:
            workplace = replace(workplace, id=uuid.uuid4().hex)

        data = workplace.to_dict()
        db_workplace = self.db.query(WorkplaceDB).filter_by(id=workplace.id).first()
        if not db_workplace:
            db_workplace = WorkplaceDB(id=workplace.id)
            self.db.add(db_workplace)

        db_workplace.name = workplace.name
        db_workplace.color = workplace.color
        db_workplace.hourly_wage = workplace.hourly_wage
        db_workplace.break_type = data['breakType']
        db_workplace.break_every_hours = workplace.break_policy.every_hours
        db_workplace.break_minutes_per_block = workplace.break_policy.minutes_per_block
        db_workplace.tax_type = data['taxType']
        db_workplace.settings_json = json.dumps(data['settings'])
        db_workplace.insurance_json = json.dumps(data['insuranceSettings'])

        self.db.commit()
        logger.info("Saved workplace %s (%s)", workplace.id, workplace.name)
        return workplace

    def get_workplace(self, workplace_id: str) -> Optional[WorkplaceConfig]:
        """Get workplace by ID"""
        row = self.db.query(WorkplaceDB).filter_by(id=workplace_id).first()
        return self._to_workplace(row) if row else None

    def get_all_workplaces(self) -> List[WorkplaceConfig]:
        rows = self.db.query(WorkplaceDB).order_by(WorkplaceDB.created_at, WorkplaceDB.id).all()
        return [self._to_workplace(r) for r in rows]

    def delete_workplace(self, workplace_id: str) -> bool:
        """Delete workplace and its shifts"""
        row = self.db.query(WorkplaceDB).filter_by(id=workplace_id).first()
        if not row:
            return False
        self.db.delete(row)
        self.db.commit()
        logger.info("Deleted workplace %s", workplace_id)
        return True

    # ========== Shift Operations ==========

    def add_shift(self, shift: Shift) -> Shift:
        if not shift.workplace_id or not self.db.query(WorkplaceDB).filter_by(id=shift.workplace_id).first():
            raise ValueError(f"Workplace {shift.workplace_id} not found")

        row = ShiftDB(
            workplace_id=shift.workplace_id,
            date=shift.date,
            start_time=shift.start_time,
            end_time=shift.end_time,
            memo=shift.memo,
            is_holiday=shift.is_holiday,
            source=shift.source,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self._to_shift(row)

    def update_shift(self, shift_id: int, shift: Shift) -> Optional[Shift]:
        row = self.db.query(ShiftDB).filter_by(id=shift_id).first()
        if not row:
            return None

        row.date = shift.date
        row.start_time = shift.start_time
        row.end_time = shift.end_time
        row.memo = shift.memo
        row.is_holiday = shift.is_holiday
        if shift.workplace_id:
            row.workplace_id = shift.workplace_id
        self.db.commit()
        self.db.refresh(row)
        return self._to_shift(row)

    def delete_shift(self, shift_id: int) -> bool:
        row = self.db.query(ShiftDB).filter_by(id=shift_id).first()
        if not row:
            return False
        self.db.delete(row)
        self.db.commit()
        return True

    def get_shift(self, shift_id: int) -> Optional[Shift]:
        row = self.db.query(ShiftDB).filter_by(id=shift_id).first()
        return self._to_shift(row) if row else None

    def get_all_shifts(self) -> List[Shift]:
        rows = self.db.query(ShiftDB).order_by(ShiftDB.date, ShiftDB.start_time).all()
        return [self._to_shift(r) for r in rows]

    def get_shifts_by_workplace(self, workplace_id: str) -> List[Shift]:
        rows = self.db.query(ShiftDB).filter_by(workplace_id=workplace_id).order_by(
            ShiftDB.date, ShiftDB.start_time
        ).all()
        return [self._to_shift(r) for r in rows]

    def get_shifts_by_date_range(self, start: date, end: date,
                                 workplace_id: Optional[str] = None) -> List[Shift]:
        """Shifts dated within [start, end], optionally for one workplace"""
        query = self.db.query(ShiftDB).filter(
            and_(
                ShiftDB.date >= start,
                ShiftDB.date <= end
            )
        )
        if workplace_id:
            query = query.filter_by(workplace_id=workplace_id)
        return [self._to_shift(r) for r in query.order_by(ShiftDB.date, ShiftDB.start_time).all()]

    # ========== Helper Methods ==========

    def _to_workplace(self, row: WorkplaceDB) -> WorkplaceConfig:
        return WorkplaceConfig.from_dict({
            'id': row.id,
            'name': row.name,
            'color': row.color,
            'hourlyWage': row.hourly_wage,
            'breakType': row.break_type,
            'breakEveryHours': row.break_every_hours,
            'breakMinutesPerBlock': row.break_minutes_per_block,
            'taxType': row.tax_type,
            'settings': json.loads(row.settings_json or '{}'),
            'insuranceSettings': json.loads(row.insurance_json or '{}'),
        })

    def _to_shift(self, row: ShiftDB) -> Shift:
        return Shift(
            id=row.id,
            workplace_id=row.workplace_id,
            date=row.date,
            start_time=row.start_time,
            end_time=row.end_time,
            memo=row.memo or "",
            is_holiday=row.is_holiday,
            source=row.source or 'manual',
        )
