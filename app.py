from flask import Flask, request, jsonify, send_file
from pathlib import Path
from dataclasses import asdict
from datetime import date
import logging
import sys
import os

sys.path.insert(0, str(Path(__file__).parent / 'src'))

from albapay.config.settings import OUTPUT_DIR, SECRET_KEY, DEBUG, LOG_LEVEL
from albapay.database import init_db, SessionLocal, ShiftRepository
from albapay.models import Shift, ShiftCandidate, WorkplaceConfig
from albapay.models.shift import normalize_keys
from albapay.processors import (
    calculate_salary_detail,
    calculate_range_summary,
    confirm_candidates,
    month_range,
    SalaryReportGenerator
)
from albapay.utils.validators import parse_iso_date

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(session_factory=SessionLocal, report_dir=None, holiday_cache=None):
    """Build the API app.

    With a ``holiday_cache`` (an ``albapay.api.HolidayCache``), shifts whose
    holiday flag is unset are looked up before pay is calculated.
    """
    app = Flask(__name__)
    app.config['SECRET_KEY'] = SECRET_KEY
    app.config['DEBUG'] = DEBUG
    report_dir = Path(report_dir) if report_dir else OUTPUT_DIR / 'reports'

    def open_repo():
        return ShiftRepository(session_factory())

    def error(message, status=400):
        return jsonify({'success': False, 'message': message}), status

    def with_holidays(shifts):
        return holiday_cache.annotate(shifts) if holiday_cache is not None else shifts

    def current_month_range():
        today = date.today()
        start = request.args.get('start') or f"{today.year}-01"
        end = request.args.get('end') or f"{today.year}-{today.month:02d}"
        return month_range(start, end)

    # ========================================================================
    # Workplaces
    # ========================================================================

    @app.route('/api/workplaces', methods=['GET'])
    def list_workplaces():
        repo = open_repo()
        try:
            return jsonify([w.to_dict() for w in repo.get_all_workplaces()])
        finally:
            repo.db.close()

    @app.route('/api/workplaces', methods=['POST'])
    def create_workplace():
        data = request.get_json(silent=True) or {}
        if not data.get('name') or not data.get('hourlyWage'):
            return error('Workplace name and hourly wage are required')

        repo = open_repo()
        try:
            workplace = repo.save_workplace(WorkplaceConfig.from_dict({**data, 'id': None}))
            return jsonify({'success': True, 'workplace': workplace.to_dict()}), 201
        except ValueError as e:
            return error(str(e))
        finally:
            repo.db.close()

    @app.route('/api/workplaces/<workplace_id>', methods=['PUT'])
    def update_workplace(workplace_id):
        data = request.get_json(silent=True) or {}
        repo = open_repo()
        try:
            existing = repo.get_workplace(workplace_id)
            if existing is None:
                return error('Workplace not found', 404)
            merged = {**existing.to_dict(), **data, 'id': workplace_id}
            workplace = repo.save_workplace(WorkplaceConfig.from_dict(merged))
            return jsonify({'success': True, 'workplace': workplace.to_dict()})
        except ValueError as e:
            return error(str(e))
        finally:
            repo.db.close()

    @app.route('/api/workplaces/<workplace_id>', methods=['DELETE'])
    def delete_workplace(workplace_id):
        repo = open_repo()
        try:
            if not repo.delete_workplace(workplace_id):
                return error('Workplace not found', 404)
            return jsonify({'success': True, 'message': 'Workplace deleted'})
        finally:
            repo.db.close()

    # ========================================================================
    # Shifts
    # ========================================================================

    @app.route('/api/shifts', methods=['GET'])
    def list_shifts():
        repo = open_repo()
        try:
            workplace_id = request.args.get('workplace_id')
            if request.args.get('from') and request.args.get('to'):
                shifts = repo.get_shifts_by_date_range(
                    parse_iso_date(request.args['from']),
                    parse_iso_date(request.args['to']),
                    workplace_id
                )
            elif workplace_id:
                shifts = repo.get_shifts_by_workplace(workplace_id)
            else:
                shifts = repo.get_all_shifts()
            return jsonify([s.to_dict() for s in shifts])
        except ValueError as e:
            return error(str(e))
        finally:
            repo.db.close()

    @app.route('/api/shifts', methods=['POST'])
    def create_shift():
        """Add a shift; a ``dates`` list adds the same times on each date"""
        data = request.get_json(silent=True) or {}
        if 'dates' in data:
            return create_shifts_on_dates(data)

        repo = open_repo()
        try:
            shift = repo.add_shift(Shift.from_dict(data))
            return jsonify({'success': True, 'shift': shift.to_dict()}), 201
        except (TypeError, ValueError) as e:
            return error(str(e))
        finally:
            repo.db.close()

    def create_shifts_on_dates(data):
        dates = data.get('dates')
        if not isinstance(dates, list) or not dates:
            return error('dates must be a non-empty list')

        repo = open_repo()
        saved = []
        failed = []
        try:
            for day in sorted(dates, key=str):
                try:
                    shift = repo.add_shift(Shift.from_dict({**data, 'date': day}))
                    saved.append(shift.to_dict())
                except (TypeError, ValueError) as e:
                    failed.append({'date': day, 'message': str(e)})
        finally:
            repo.db.close()

        logger.info("Added %d shifts, %d failed", len(saved), len(failed))
        return jsonify({
            'success': not failed,
            'message': f'Saved {len(saved)} shifts, {len(failed)} failed',
            'shifts': saved,
            'failed': failed
        }), 201 if saved else 400

    @app.route('/api/shifts/<int:shift_id>', methods=['PUT'])
    def update_shift(shift_id):
        repo = open_repo()
        try:
            existing = repo.get_shift(shift_id)
            if existing is None:
                return error('Shift not found', 404)
            merged = {**existing.to_dict(), **normalize_keys(request.get_json(silent=True) or {})}
            shift = repo.update_shift(shift_id, Shift.from_dict(merged))
            return jsonify({'success': True, 'shift': shift.to_dict()})
        except (TypeError, ValueError) as e:
            return error(str(e))
        finally:
            repo.db.close()

    @app.route('/api/shifts/<int:shift_id>', methods=['DELETE'])
    def delete_shift(shift_id):
        repo = open_repo()
        try:
            if not repo.delete_shift(shift_id):
                return error('Shift not found', 404)
            return jsonify({'success': True, 'message': 'Shift deleted'})
        finally:
            repo.db.close()

    @app.route('/api/shifts/confirm', methods=['POST'])
    def confirm_shift_candidates():
        """Save reviewed candidates from schedule image extraction"""
        data = request.get_json(silent=True) or {}
        workplace_id = data.get('workplace_id')
        try:
            candidates = [ShiftCandidate.from_dict(c) for c in data.get('candidates', [])]
        except ValueError as e:
            return error(str(e))

        repo = open_repo()
        try:
            if repo.get_workplace(workplace_id) is None:
                return error('Workplace not found', 404)

            accepted, rejected = confirm_candidates(
                candidates, workplace_id, accept_uncertain=bool(data.get('accept_uncertain'))
            )
            saved = [repo.add_shift(s) for s in accepted]
            return jsonify({
                'success': True,
                'message': f'Saved {len(saved)} shifts',
                'shifts': [s.to_dict() for s in saved],
                'rejected': [{'candidate': asdict(c), 'reason': reason} for c, reason in rejected]
            })
        finally:
            repo.db.close()

    # ========================================================================
    # Salary
    # ========================================================================

    @app.route('/api/salary', methods=['GET'])
    def salary_summary():
        """Income per workplace for a month range (?start=YYYY-MM&end=YYYY-MM)"""
        repo = open_repo()
        try:
            start, end = current_month_range()
            shifts = with_holidays(repo.get_all_shifts())
            summary = calculate_range_summary(repo.get_all_workplaces(), shifts, start, end)
            return jsonify(summary.to_dict())
        except ValueError as e:
            return error(str(e))
        finally:
            repo.db.close()

    @app.route('/api/salary/<workplace_id>', methods=['GET'])
    def salary_detail(workplace_id):
        """Itemized pay for one workplace (?start=YYYY-MM-DD&end=YYYY-MM-DD)"""
        repo = open_repo()
        try:
            workplace = repo.get_workplace(workplace_id)
            if workplace is None:
                return error('Workplace not found', 404)

            history = with_holidays(repo.get_shifts_by_workplace(workplace_id))
            shifts = history
            if request.args.get('start') and request.args.get('end'):
                start = parse_iso_date(request.args['start'])
                end = parse_iso_date(request.args['end'])
                shifts = [s for s in history if start <= s.date <= end]

            detail = calculate_salary_detail(shifts, workplace, history=history)
            return jsonify({'workplace_id': workplace_id, 'shift_count': len(shifts), **detail.to_dict()})
        except ValueError as e:
            return error(str(e))
        finally:
            repo.db.close()

    # ========================================================================
    # Reports
    # ========================================================================

    @app.route('/api/reports/salary', methods=['POST'])
    def generate_salary_report():
        data = request.get_json(silent=True) or {}
        repo = open_repo()
        try:
            today = date.today()
            start, end = month_range(
                data.get('start') or f"{today.year}-{today.month:02d}",
                data.get('end') or f"{today.year}-{today.month:02d}"
            )
            shifts = with_holidays(repo.get_all_shifts())
            summary = calculate_range_summary(repo.get_all_workplaces(), shifts, start, end)
            filepath = SalaryReportGenerator(report_dir).generate(summary, shifts)
            return jsonify({
                'success': True,
                'message': 'Salary report generated successfully',
                'file': Path(filepath).name
            })
        except ValueError as e:
            return error(str(e))
        finally:
            repo.db.close()

    @app.route('/api/download/<path:filename>')
    def download_file(filename):
        """Download a generated report"""
        filepath = report_dir / Path(filename).name
        if filepath.exists():
            return send_file(filepath, as_attachment=True)
        return jsonify({'error': 'File not found'}), 404

    return app


if __name__ == '__main__':
    init_db()
    app = create_app()
    port = int(os.getenv('PORT', 5000))
    logger.info("Starting albapay API on port %d", port)
    app.run(host='0.0.0.0', port=port, debug=DEBUG)
