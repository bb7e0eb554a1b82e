import logging
import sys
from datetime import date
from albapay.config.settings import LOG_LEVEL
from albapay.database import init_db, SessionLocal, ShiftRepository
from albapay.processors import calculate_monthly_summary, month_range
from albapay.utils.formatters import format_won

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main(argv=None):
    """Print this month's (or YYYY-MM's) income per workplace"""
    argv = sys.argv[1:] if argv is None else argv
    today = date.today()
    year, month = today.year, today.month
    if argv:
        try:
            first_day, _ = month_range(argv[0], argv[0])
        except ValueError as e:
            print(f"{e}\nusage: albapay [YYYY-MM]", file=sys.stderr)
            return 2
        year, month = first_day.year, first_day.month

    logger.info("Initializing database...")
    init_db()

    db = SessionLocal()
    try:
        repo = ShiftRepository(db)
        summary = calculate_monthly_summary(repo.get_all_workplaces(), repo.get_all_shifts(), year, month)
    finally:
        db.close()

    print("=" * 60)
    print(f"{year}-{month:02d} income")
    print("=" * 60)
    for item in summary.per_workplace:
        print(f"{item.workplace.name:<20} {item.shift_count:>3} shifts  {format_won(item.detail.total_after_tax):>14}")
        for warning in item.detail.warnings:
            print(f"    ! {warning}")
    print("-" * 60)
    print(f"{'Total':<20} {summary.total_shifts:>3} shifts  {format_won(summary.total_pay):>14}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
