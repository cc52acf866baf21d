"""
Lightweight stand-ins for requests and task types.

The analytics core only reads attributes, so plain namespaces are enough
and keep those tests off the database.
"""

from datetime import datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

TOKYO = ZoneInfo('Asia/Tokyo')


def tokyo(year, month, day, hour=12, minute=0):
    """Aware datetime in the project time zone."""
    return datetime(year, month, day, hour, minute, tzinfo=TOKYO)


def make_task_type(id, name, estimated_time_per_unit=0.5):
    return SimpleNamespace(
        id=id, name=name, estimated_time_per_unit=estimated_time_per_unit,
    )


def make_request(
    requester_name='Sato',
    task_type_id=1,
    status='pending',
    estimated_minutes=10,
    updated_at=None,
    completed_at=None,
    quantity=1,
):
    return SimpleNamespace(
        requester_name=requester_name,
        task_type_id=task_type_id,
        status=status,
        estimated_minutes=estimated_minutes,
        quantity=quantity,
        updated_at=updated_at or tokyo(2024, 3, 15),
        completed_at=completed_at,
    )
