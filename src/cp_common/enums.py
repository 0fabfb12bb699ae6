"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class UserRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"
    CONTRACTOR = "CONTRACTOR"  # general contractor
    SUBCONTRACTOR = "SUBCONTRACTOR"
    BROKER = "BROKER"


ADMIN_ROLES = (UserRole.SUPER_ADMIN, UserRole.ADMIN)
STAFF_ROLES = (UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.MANAGER)


class ContractorStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    SUSPENDED = "SUSPENDED"


class InsuranceStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    NON_COMPLIANT = "NON_COMPLIANT"
    PENDING = "PENDING"
    EXPIRED = "EXPIRED"


class ContractorType(str, Enum):
    GENERAL_CONTRACTOR = "GENERAL_CONTRACTOR"
    SUBCONTRACTOR = "SUBCONTRACTOR"


class ProjectStatus(str, Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class COIStatus(str, Enum):
    AWAITING_BROKER_INFO = "AWAITING_BROKER_INFO"
    AWAITING_BROKER_UPLOAD = "AWAITING_BROKER_UPLOAD"
    AWAITING_BROKER_SIGNATURE = "AWAITING_BROKER_SIGNATURE"
    AWAITING_ADMIN_REVIEW = "AWAITING_ADMIN_REVIEW"
    ACTIVE = "ACTIVE"
    DEFICIENCY_PENDING = "DEFICIENCY_PENDING"
    EXPIRED = "EXPIRED"


AWAITING_COI_STATUSES = (
    COIStatus.AWAITING_BROKER_INFO,
    COIStatus.AWAITING_BROKER_UPLOAD,
    COIStatus.AWAITING_BROKER_SIGNATURE,
    COIStatus.AWAITING_ADMIN_REVIEW,
)


class BrokerType(str, Enum):
    GLOBAL = "GLOBAL"
    PER_POLICY = "PER_POLICY"


class PolicyType(str, Enum):
    GL = "GL"
    UMBRELLA = "UMBRELLA"
    AUTO = "AUTO"
    WC = "WC"


POLICY_DISPLAY_NAMES = {
    PolicyType.GL: "General Liability",
    PolicyType.UMBRELLA: "Umbrella",
    PolicyType.AUTO: "Auto Liability",
    PolicyType.WC: "Workers Compensation",
}


class HoldHarmlessStatus(str, Enum):
    PENDING_SUB_SIGNATURE = "PENDING_SUB_SIGNATURE"
    PENDING_GC_SIGNATURE = "PENDING_GC_SIGNATURE"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


class ReviewStatus(str, Enum):
    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REQUIRES_CHANGES = "REQUIRES_CHANGES"


class ReviewPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ReviewDecision(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CONDITIONAL_APPROVAL = "CONDITIONAL_APPROVAL"


class DeficiencyCategory(str, Enum):
    COVERAGE_AMOUNT = "COVERAGE_AMOUNT"
    EXPIRED_POLICY = "EXPIRED_POLICY"
    MISSING_ENDORSEMENT = "MISSING_ENDORSEMENT"
    INCORRECT_NAMED_INSURED = "INCORRECT_NAMED_INSURED"
    MISSING_ADDITIONAL_INSURED = "MISSING_ADDITIONAL_INSURED"
    CERTIFICATE_HOLDER = "CERTIFICATE_HOLDER"
    OTHER = "OTHER"


class DeficiencySeverity(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class DeficiencyStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"


class ReminderType(str, Enum):
    DAYS_30 = "DAYS_30"
    DAYS_14 = "DAYS_14"
    DAYS_7 = "DAYS_7"
    DAYS_2 = "DAYS_2"
    EXPIRED = "EXPIRED"
    EVERY_2_DAYS = "EVERY_2_DAYS"


class NotificationType(str, Enum):
    COI_EXPIRING = "COI_EXPIRING"
    REVIEW_ASSIGNED = "REVIEW_ASSIGNED"
    DEFICIENCY_CREATED = "DEFICIENCY_CREATED"
    APPROVAL_REQUIRED = "APPROVAL_REQUIRED"
    HOLD_HARMLESS = "HOLD_HARMLESS"
    GENERAL = "GENERAL"


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    VIEW = "VIEW"
    DOWNLOAD = "DOWNLOAD"
    UPLOAD = "UPLOAD"
    APPROVE = "APPROVE"
    REJECT = "REJECT"


class AuditResource(str, Enum):
    USER = "USER"
    CONTRACTOR = "CONTRACTOR"
    PROJECT = "PROJECT"
    PROGRAM = "PROGRAM"
    COI = "COI"
    HOLD_HARMLESS = "HOLD_HARMLESS"
    SYSTEM = "SYSTEM"
