from .db import engine, SessionLocal, Base, init_db, make_engine
from .models import WorkplaceDB, ShiftDB
from .repository import ShiftRepository

__all__ = [
    'engine',
    'SessionLocal',
    'Base',
    'init_db',
    'make_engine',
    'WorkplaceDB',
    'ShiftDB',
    'ShiftRepository'
]
