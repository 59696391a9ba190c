from enum import Enum


class RegistrationState(Enum):
    UNREGISTERED = "Unregistered"
    REGISTERED = "Registered"
    CHECKED_IN = "Checked In"


class ReportCategory(Enum):
    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    COPYRIGHT = "copyright"
    HARASSMENT = "harassment"
    FAKE = "fake"
    OTHER = "other"


class ReportStatus(Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    DISMISSED = "dismissed"


class RestrictionType(Enum):
    CANNOT_PUBLISH = "cannot_publish"
    CANNOT_COMMENT = "cannot_comment"
