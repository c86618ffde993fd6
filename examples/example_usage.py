"""Example: use the service layer directly, without Flask.

Controllers stay thin; the payroll rules live in PayrollService.
"""

import importlib

from config import get_settings_module

from src.hrms_portal.hrms_portal.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        weekly_off_days=settings.WEEKLY_OFF_DAYS,
    )
    result = container.payroll_service.calculate(employee_id=1, month="2025-03")
    print(f"gross={result.gross} deduction={result.deduction} net={result.net}")


if __name__ == "__main__":
    main()
