"""Request parameter validation for the scoring endpoints.

Turns raw query parameters into the values the scoring engine expects:
canonical location identifiers and a calendar month.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, List, Mapping, Optional

import structlog

from config.errors import ErrorCode, ValidationError
from models.location_record import canonical_location_id

logger = structlog.get_logger(__name__)

# Plain ASCII integer, no underscores
MONTH_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


@dataclass
class ParamCheck:
    """Result of checking a set of required parameters."""
    is_valid: bool = True
    missing: List[str] = field(default_factory=list)


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def check_required(params: Mapping[str, Any], names: List[str]) -> ParamCheck:
    """Report which of the required parameters are absent or blank."""
    missing = [name for name in names if _is_blank(params.get(name))]
    return ParamCheck(is_valid=not missing, missing=missing)


def require_location_ids(params: Mapping[str, Any], *names: str) -> List[str]:
    """Return canonical identifiers for every named parameter.

    Args:
        params: Request query parameters.
        names: Parameter names that must all be present.

    Returns:
        Canonical identifiers, in the order requested.

    Raises:
        ValidationError: If any parameter is missing, before any lookup runs.
    """
    check = check_required(params, list(names))
    if not check.is_valid:
        label = " and ".join(names)
        plural = "parameters" if len(names) > 1 else "parameter"
        raise ValidationError(
            message=f"Missing required {plural}: {label}",
            field=check.missing[0] if len(check.missing) == 1 else None,
            code=ErrorCode.MISSING_FIELD,
            details={"missing": check.missing},
        )
    return [canonical_location_id(params[name]) for name in names]


def require_location_id(params: Mapping[str, Any], name: str) -> str:
    """Return the canonical identifier for one required parameter."""
    return require_location_ids(params, name)[0]


def current_month(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
    """Current calendar month; system local time unless a zone is given."""
    if now is None:
        now = datetime.now(tz)
    elif tz is not None and now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.month


def normalize_month(
    value: Any,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> int:
    """Parse a month parameter.

    Absent, non-numeric and out-of-range values fall back to the current
    month instead of failing.

    Args:
        value: Raw parameter (string, int or None).
        now: Clock override.
        tz: Zone for the fallback. None means system local time.

    Returns:
        Month 1-12.
    """
    text = "" if value is None else str(value).strip()
    month = int(text) if MONTH_PATTERN.fullmatch(text) else None

    if month is None or not 1 <= month <= 12:
        fallback = current_month(now, tz)
        if value is not None:
            logger.debug("month_defaulted", raw=str(value)[:20], month=fallback)
        return fallback
    return month
