import enum


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    COUPLE = "COUPLE"


class RsvpStatus(str, enum.Enum):
    PENDING = "PENDING"
    ATTENDING = "ATTENDING"
    DECLINED = "DECLINED"


class PhotoStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
