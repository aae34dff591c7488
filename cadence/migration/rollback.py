from __future__ import annotations

import copy
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

from cadence.core.errors import NoRollbackAvailableError
from cadence.core.logging_config import logger


def _timestamp(now: Optional[datetime]) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def _scheme_tag(scheme: Any) -> str:
    return str(getattr(scheme, "value", scheme))


@dataclass(frozen=True)
class RollbackSnapshot:
    timestamp: str
    original_scheme: str
    original_data: Dict[str, Any]
    rollback_available: bool = True

    def consumed(self) -> "RollbackSnapshot":
        """Same snapshot, no longer restorable."""
        return replace(self, rollback_available=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "originalScheme": self.original_scheme,
            "originalData": copy.deepcopy(self.original_data),
            "rollbackAvailable": self.rollback_available,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "RollbackSnapshot":
        original = raw.get("originalData")
        return cls(
            timestamp=str(raw.get("timestamp") or ""),
            original_scheme=_scheme_tag(raw.get("originalScheme") or ""),
            original_data=copy.deepcopy(dict(original)) if isinstance(original, Mapping) else {},
            rollback_available=bool(raw.get("rollbackAvailable")) and isinstance(original, Mapping),
        )


@dataclass(frozen=True)
class RestoredQuote:
    data: Dict[str, Any]
    scheme: str
    restored_at: str
    # the snapshot as it must be stored after this restore
    snapshot: RollbackSnapshot

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "scheme": self.scheme, "restoredAt": self.restored_at}


def create_rollback_data(
    original_data: Optional[Mapping[str, Any]],
    original_scheme: Any,
    *,
    now: Optional[datetime] = None,
) -> RollbackSnapshot:
    """Capture the quote exactly as it was before a scheme change."""
    return RollbackSnapshot(
        timestamp=_timestamp(now),
        original_scheme=_scheme_tag(original_scheme),
        original_data=copy.deepcopy(dict(original_data or {})),
        rollback_available=True,
    )


def rollback_quote_data(
    snapshot: Union[RollbackSnapshot, Mapping[str, Any], None],
    *,
    now: Optional[datetime] = None,
) -> RestoredQuote:
    """
    Restore the pre-change quote data and scheme tag from a snapshot.

    A snapshot restores at most once: the result carries the consumed snapshot
    (`rollbackAvailable` false), which the caller stores in place of the old one.
    """
    if snapshot is None:
        raise NoRollbackAvailableError()
    if not isinstance(snapshot, RollbackSnapshot):
        snapshot = RollbackSnapshot.from_dict(snapshot)
    if not snapshot.rollback_available:
        raise NoRollbackAvailableError()

    logger.bind(scheme=snapshot.original_scheme, snapshot=snapshot.timestamp).info("quote_data_rolled_back")
    return RestoredQuote(
        data=copy.deepcopy(snapshot.original_data),
        scheme=snapshot.original_scheme,
        restored_at=_timestamp(now),
        snapshot=snapshot.consumed(),
    )
