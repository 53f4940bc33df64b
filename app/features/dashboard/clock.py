"""Clock used by dashboard reads.

All bucketing happens in one configured time zone rather than the host's
local zone, so the same rows produce the same hour and day buckets wherever
the service runs.
"""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

HOURS_PER_DAY = 24
DAY_LABEL_FORMAT = "%b %d"


def utc_now() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(UTC)


class DashboardClock:
    """Current time plus the calendar helpers the dashboard needs.

    Args:
        tz_name: IANA zone used for hour-of-day and calendar-day bucketing.
        now: Source of the current instant. Defaults to the system clock.
    """

    def __init__(
        self,
        tz_name: str = "UTC",
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.tz = ZoneInfo(tz_name)
        self._now = now or utc_now

    def now(self) -> datetime:
        """Current instant in UTC."""
        return self.localize(self._now()).astimezone(UTC)

    def days_before(self, instant: datetime, days: int) -> datetime:
        """Instant exactly ``days`` days before ``instant``."""
        return instant - timedelta(days=days)

    def localize(self, instant: datetime) -> datetime:
        """Convert to the dashboard zone. Naive values are taken as UTC."""
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return instant.astimezone(self.tz)

    def hour_of_day(self, instant: datetime) -> int:
        """Hour (0-23) of ``instant`` in the dashboard zone."""
        return self.localize(instant).hour

    def day_key(self, instant: datetime) -> date:
        """Calendar day of ``instant`` in the dashboard zone."""
        return self.localize(instant).date()

    @staticmethod
    def hour_label(hour: int) -> str:
        """Label for an hourly bucket, e.g. ``"9:00"``."""
        return f"{hour}:00"

    @staticmethod
    def day_label(day: date) -> str:
        """Short label for a daily bucket, e.g. ``"Oct 05"``."""
        return day.strftime(DAY_LABEL_FORMAT)
