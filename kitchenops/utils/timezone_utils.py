from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone

import pytz
from flask import current_app, has_app_context

DEFAULT_TIMEZONE = "UTC"


class TimezoneUtils:
    """Timestamps are stored in UTC; business dates follow BUSINESS_TIMEZONE."""

    @staticmethod
    def utc_now() -> datetime:
        """Return the current UTC timestamp (timezone aware)."""
        return datetime.now(dt_timezone.utc)

    @staticmethod
    def business_timezone():
        name = DEFAULT_TIMEZONE
        if has_app_context():
            name = current_app.config.get("BUSINESS_TIMEZONE") or DEFAULT_TIMEZONE
        try:
            return pytz.timezone(name)
        except pytz.UnknownTimeZoneError:
            return pytz.timezone(DEFAULT_TIMEZONE)

    @staticmethod
    def business_today() -> date:
        """Calendar date in the business timezone."""
        return TimezoneUtils.utc_now().astimezone(TimezoneUtils.business_timezone()).date()

    @staticmethod
    def ensure_utc(value: datetime | None) -> datetime | None:
        """SQLite drops tzinfo; treat naive values as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=dt_timezone.utc)
        return value.astimezone(dt_timezone.utc)
