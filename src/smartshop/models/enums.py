"""
Closed enumerations shared by the SmartShop entities.

Decoding an unknown value fails validation; there is no fallback member.
"""

from enum import Enum, IntEnum


class PermissionGroup(str, Enum):
    LOCATION = "LOCATION"
    STORAGE = "STORAGE"
    CAMERA = "CAMERA"
    MICROPHONE = "MICROPHONE"
    SENSORS = "SENSORS"
    NOTIFICATIONS = "NOTIFICATIONS"
    CONTACTS = "CONTACTS"
    PHONE = "PHONE"
    SMS = "SMS"
    CALENDAR = "CALENDAR"
    ACTIVITY_RECOGNITION = "ACTIVITY_RECOGNITION"
    OTHER = "OTHER"


class RankingType(str, Enum):
    HOT = "HOT"
    NEW = "NEW"
    RATING = "RATING"


class ReportType(str, Enum):
    APP = "APP"
    COMMENT = "COMMENT"

    @property
    def form_value(self) -> str:
        """Spelling expected by the report submission form."""
        return self.value.lower()


class ReportReason(str, Enum):
    INAPPROPRIATE = "INAPPROPRIATE"
    SPAM = "SPAM"
    VIOLENCE = "VIOLENCE"
    INFRINGES_RIGHTS = "INFRINGES_RIGHTS"
    MALWARE = "MALWARE"
    OTHER = "OTHER"


class ReportStatus(str, Enum):
    PENDING = "PENDING"
    REVIEWING = "REVIEWING"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"

    def can_advance_to(self, target: "ReportStatus") -> bool:
        return target in _REPORT_STATUS_FLOW[self]


_REPORT_STATUS_FLOW = {
    ReportStatus.PENDING: frozenset({ReportStatus.REVIEWING}),
    ReportStatus.REVIEWING: frozenset({ReportStatus.RESOLVED, ReportStatus.REJECTED}),
    ReportStatus.RESOLVED: frozenset(),
    ReportStatus.REJECTED: frozenset(),
}


class DownloadStatus(str, Enum):
    PENDING = "PENDING"
    DOWNLOADING = "DOWNLOADING"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELED = "CANCELED"
    INSTALLING = "INSTALLING"
    INSTALLED = "INSTALLED"


class UserRole(IntEnum):
    USER = 0
    OPERATOR = 1
    REVIEWER = 2
    ADMIN = 3


class UserStatus(IntEnum):
    NORMAL = 0
    BANNED = 1
