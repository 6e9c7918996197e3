"""
Operator access control.

Only the operator may distribute rewards. The operator can hand the role to
another identity or renounce it, after which no one can distribute rewards.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from django.conf import settings

from ethpool.apps.pool.exceptions import InvalidOperatorError, UnauthorizedError

logger = logging.getLogger(__name__)


class OperatorAccess:
    def __init__(self, operator: Optional[str]):
        self._operator = operator or None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls) -> "OperatorAccess":
        return cls(getattr(settings, "POOL_OPERATOR_ADDRESS", "") or None)

    @property
    def operator(self) -> Optional[str]:
        return self._operator

    def is_operator(self, caller: Optional[str]) -> bool:
        return self._operator is not None and caller == self._operator

    def require_operator(self, caller: Optional[str]) -> None:
        if not self.is_operator(caller):
            logger.warning(f"[Pool] Rejected operator call from {caller!r}")
            raise UnauthorizedError("caller is not the operator")

    def transfer_operator(self, caller: Optional[str], new_operator: str) -> None:
        with self._lock:
            self.require_operator(caller)
            if not new_operator:
                raise InvalidOperatorError("new operator must not be empty")
            logger.info(f"[Pool] Operator role moved from {caller} to {new_operator}")
            self._operator = new_operator

    def renounce_operator(self, caller: Optional[str]) -> None:
        with self._lock:
            self.require_operator(caller)
            logger.info(f"[Pool] Operator {caller} renounced the role")
            self._operator = None
