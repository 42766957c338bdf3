"""
Duty cycle for barangay officials.

An official is either off duty or on duty. Timing in sets ``time_in`` and
clears ``time_out``; timing out sets ``time_out``. Both transitions are
idempotent: repeating one (a double-submitted button press) leaves the
row untouched.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .models import DutyStatus, Official
from .resources import ResourceList

logger = logging.getLogger(__name__)


class DutyCycle:
    """Duty transitions for officials, written through a ResourceList"""

    def __init__(self, officials: ResourceList):
        if officials.collection != 'officials':
            raise ValueError("DutyCycle needs the officials resource list")
        self.officials = officials

    def time_in(self, official_id: str, user_id: Optional[str], now: Optional[datetime] = None) -> Official:
        """
        Put an official on duty.

        Returns the current record unchanged if already on duty.
        """
        official = self.officials.get(official_id)
        if official.is_on_duty():
            logger.info(f"Official {official_id} already on duty; ignoring time-in")
            return official

        return self.officials.update(official_id, {
            'duty_status': DutyStatus.ON_DUTY.value,
            'time_in': now or datetime.now(timezone.utc),
            'time_out': None,
        }, user_id)

    def time_out(self, official_id: str, user_id: Optional[str], now: Optional[datetime] = None) -> Official:
        """
        Take an official off duty.

        Returns the current record unchanged if already off duty.
        """
        official = self.officials.get(official_id)
        if not official.is_on_duty():
            logger.info(f"Official {official_id} already off duty; ignoring time-out")
            return official

        return self.officials.update(official_id, {
            'duty_status': DutyStatus.OFF_DUTY.value,
            'time_out': now or datetime.now(timezone.utc),
        }, user_id)

    def toggle(self, official_id: str, user_id: Optional[str], now: Optional[datetime] = None) -> Official:
        """Single-button form: time out if on duty, else time in"""
        official = self.officials.get(official_id)
        if official.is_on_duty():
            return self.time_out(official_id, user_id, now)
        return self.time_in(official_id, user_id, now)
