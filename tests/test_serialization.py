from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal

from src.hrms_portal.hrms_portal.common.serialization import to_json
from src.hrms_portal.hrms_portal.core.enums import RequestStatus


def test_money_keeps_its_digits_up_to_the_column_limit():
    for raw in ("9999999999.99", "1234567890.12", "0.01", "384.62"):
        assert json.dumps(to_json(Decimal(raw))) == raw


def test_nested_values_are_converted():
    out = to_json(
        {
            "status": RequestStatus.PENDING,
            "on": date(2025, 3, 1),
            "at": datetime(2025, 3, 1, 9, 5, 0),
            "amounts": (Decimal("10.50"),),
        }
    )

    assert out == {"status": "PENDING", "on": "2025-03-01", "at": "2025-03-01 09:05:00", "amounts": [10.5]}
