"""Row-level tenant isolation for generated COIs."""

from sqlalchemy import ColumnElement, false, func, or_, select, true

from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_common.enums import UserRole
from src.cp_contractors.infrastructure.db_models import ContractorModel
from src.cp_gateway.user.db_models import UserModel
from src.cp_projects.infrastructure.db_models import ProjectModel

_BROKER_EMAIL_COLUMNS = (
    GeneratedCOIModel.broker_email,
    GeneratedCOIModel.broker_gl_email,
    GeneratedCOIModel.broker_umbrella_email,
    GeneratedCOIModel.broker_auto_email,
    GeneratedCOIModel.broker_wc_email,
)


def coi_visibility_clause(user: UserModel) -> ColumnElement[bool]:
    email = user.email.lower()
    role = user.role

    if role in (UserRole.SUPER_ADMIN.value, UserRole.MANAGER.value):
        return true()
    if role == UserRole.ADMIN.value:
        return or_(
            func.lower(GeneratedCOIModel.assigned_admin_email) == email,
            GeneratedCOIModel.assigned_admin_email.is_(None),
        )
    if role == UserRole.CONTRACTOR.value:
        return GeneratedCOIModel.project_id.in_(
            select(ProjectModel.id).where(func.lower(ProjectModel.contact_email) == email)
        )
    if role == UserRole.SUBCONTRACTOR.value:
        return GeneratedCOIModel.subcontractor_id.in_(
            select(ContractorModel.id).where(func.lower(ContractorModel.email) == email)
        )
    if role == UserRole.BROKER.value:
        return or_(*(func.lower(col) == email for col in _BROKER_EMAIL_COLUMNS))
    return false()
