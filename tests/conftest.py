import sys
from pathlib import Path
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root and src to path
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))
sys.path.insert(0, str(ROOT_DIR / 'src'))

from albapay.database import init_db
from albapay.models import (
    AllowancePolicy,
    BreakPolicy,
    DeductionScheme,
    InsuranceComponent,
    InsuranceSettings,
    PolicySelection,
    WorkplaceConfig
)

YES = PolicySelection.YES


def make_workplace(wage=10000, weekly_rest=YES, night=YES, holiday=YES,
                   scheme=DeductionScheme.WITHHOLDING_3_3, break_policy=None,
                   insurance=None, id='cafe', name='Cafe'):
    return WorkplaceConfig(
        hourly_wage=Decimal(str(wage)),
        break_policy=break_policy or BreakPolicy(),
        deduction_scheme=scheme,
        insurance=insurance or InsuranceSettings(),
        allowances=AllowancePolicy(weekly_rest=weekly_rest, night=night, holiday=holiday),
        id=id,
        name=name,
    )


def full_insurance():
    return InsuranceSettings(
        pension=InsuranceComponent(True, Decimal('4.5')),
        health=InsuranceComponent(True, Decimal('3.545')),
        long_term_care=InsuranceComponent(True, Decimal('12.81')),
        employment=InsuranceComponent(True, Decimal('0.9')),
    )


@pytest.fixture
def session_factory():
    """Session factory over a fresh in-memory database"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory, tmp_path):
    from app import create_app

    app = create_app(session_factory=session_factory, report_dir=tmp_path / 'reports')
    app.config['TESTING'] = True
    return app.test_client()
