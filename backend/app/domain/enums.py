from enum import Enum


class BookingKind(str, Enum):
    GENERAL = "general"
    SAMUH_LAGAN = "samuh_lagan"
    STUDENT_AWARD = "student_award"


class BookingStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    BOOKED = "Booked"
    CONFIRMED = "Confirmed"
    AWARDED = "Awarded"


class BookingAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    CONFIRM_PAYMENT = "confirm_payment"
    CONFIRM_BOOKING = "confirm_booking"
    AWARD = "award"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class AwardRank(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    NONE = "none"


class DocumentType(str, Enum):
    AADHAR_CARD = "Aadhar Card"
    PAN_CARD = "PAN Card"
    PASSPORT = "Passport"
    EVENT_INVITATION = "Event Invitation"
    ORGANIZATION_LETTERHEAD = "Organization Letterhead"
    BIRTH_CERTIFICATE = "Birth Certificate"
    MARRIAGE_CERTIFICATE = "Marriage Certificate"
    OTHER = "Other"


class FormType(str, Enum):
    SAMUH_LAGAN = "samuhLagan"
    STUDENT_AWARDS = "studentAwards"


class NotificationType(str, Enum):
    FORM = "form"
    BOOKING = "booking"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"
    BOOKING_MANAGER = "bookingmanager"
    FORM_MANAGER = "formmanager"


STAFF_ROLES = (UserRole.ADMIN, UserRole.BOOKING_MANAGER)
FORM_ROLES = (UserRole.ADMIN, UserRole.FORM_MANAGER)
