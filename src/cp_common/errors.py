"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Contractor
  3xxx: Project/Program
  4xxx: Generated COI
  5xxx: Hold Harmless
  6xxx: Review/Deficiency
  7xxx: Reminder/Notification/Audit
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid email or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


class UserNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(1006, f"User not found: {user_id}", 404)


class InsufficientRoleError(AppError):
    def __init__(self, role: str) -> None:
        super().__init__(1007, f"Role {role} is not allowed to perform this action", 403)


class SessionNotFoundError(AppError):
    def __init__(self, session_id: str) -> None:
        super().__init__(1008, f"Session not found: {session_id}", 404)


class CannotDeleteSelfError(AppError):
    def __init__(self) -> None:
        super().__init__(1009, "Users cannot delete their own account", 400)


# --- 2xxx: Contractor ---

class ContractorNotFoundError(AppError):
    def __init__(self, contractor_id: str) -> None:
        super().__init__(2001, f"Contractor not found: {contractor_id}", 404)


class ContractorEmailExistsError(AppError):
    def __init__(self, email: str) -> None:
        super().__init__(2002, f"Contractor email already exists: {email}", 409)


class InvalidSearchQueryError(AppError):
    def __init__(self) -> None:
        super().__init__(2003, "Search query must be at least 2 characters", 400)


# --- 3xxx: Project/Program ---

class ProjectNotFoundError(AppError):
    def __init__(self, project_id: str) -> None:
        super().__init__(3001, f"Project not found: {project_id}", 404)


class ContractorAlreadyAssignedError(AppError):
    def __init__(self, contractor_id: str, project_id: str) -> None:
        super().__init__(
            3002,
            f"Contractor {contractor_id} is already assigned to project {project_id}",
            409,
        )


class ProgramNotFoundError(AppError):
    def __init__(self, program_id: str) -> None:
        super().__init__(3003, f"Program not found: {program_id}", 404)


# --- 4xxx: Generated COI ---

class COINotFoundError(AppError):
    def __init__(self, coi_id: str) -> None:
        super().__init__(4001, f"COI not found: {coi_id}", 404)


class InvalidCOITransitionError(AppError):
    def __init__(self, action: str, status: str) -> None:
        super().__init__(4002, f"Cannot {action} COI in status {status}", 400)


class InvalidBrokerInfoError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4003, f"Invalid broker info: {detail}", 400)


class HoldHarmlessGenerationFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            4004,
            f"COI approval rolled back: hold harmless generation failed ({detail})",
            400,
        )


# --- 5xxx: Hold Harmless ---

class HoldHarmlessNotFoundError(AppError):
    def __init__(self, ref: str) -> None:
        super().__init__(5001, f"Hold harmless agreement not found: {ref}", 404)


class HoldHarmlessInvalidStateError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5002, f"Hold harmless agreement {detail}", 400)


class HoldHarmlessTemplateMissingError(AppError):
    def __init__(self, program_name: str) -> None:
        super().__init__(
            5003,
            f"Program {program_name} requires hold harmless but has no template uploaded",
            400,
        )


# --- 6xxx: Review/Deficiency ---

class ReviewNotFoundError(AppError):
    def __init__(self, review_id: str) -> None:
        super().__init__(6001, f"COI review not found: {review_id}", 404)


class ReviewNotPendingError(AppError):
    def __init__(self, status: str) -> None:
        super().__init__(6002, f"Review is not pending (status {status})", 400)


class NotAssignedReviewerError(AppError):
    def __init__(self) -> None:
        super().__init__(6003, "Only the assigned reviewer can record a decision", 403)


class DeficiencyNotFoundError(AppError):
    def __init__(self, deficiency_id: str) -> None:
        super().__init__(6004, f"Deficiency not found: {deficiency_id}", 404)


# --- 7xxx: Reminder/Notification/Audit ---

class ReminderNotFoundError(AppError):
    def __init__(self, reminder_id: str) -> None:
        super().__init__(7001, f"Reminder not found: {reminder_id}", 404)


class NotificationNotFoundError(AppError):
    def __init__(self, notification_id: str) -> None:
        super().__init__(7002, f"Notification not found: {notification_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class UnsupportedApiVersionError(AppError):
    def __init__(self, version: str, supported: list[str]) -> None:
        super().__init__(
            9003,
            f"Unsupported API version {version}. Supported versions: {', '.join(supported)}",
            400,
        )


class EmailDeliveryError(AppError):
    def __init__(self, recipient: str) -> None:
        super().__init__(9004, f"Failed to send email to {recipient}", 502)
