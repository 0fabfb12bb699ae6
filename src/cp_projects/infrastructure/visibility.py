"""Row-level tenant isolation for projects.

Each role sees a different slice of the projects table. The clause returned
here is shared by project listing and the dashboard counters.
"""

from sqlalchemy import ColumnElement, false, func, or_, select, true

from src.cp_common.enums import UserRole
from src.cp_contractors.domain.brokers import BROKER_FIELDS
from src.cp_contractors.infrastructure.db_models import ContractorModel
from src.cp_gateway.user.db_models import UserModel
from src.cp_projects.infrastructure.db_models import ProjectContractorModel, ProjectModel


def broker_email_clause(email: str) -> ColumnElement[bool]:
    """Contractors naming this broker in any broker slot."""
    return or_(
        *(
            func.lower(getattr(ContractorModel, email_attr)) == email
            for _, email_attr, _ in BROKER_FIELDS.values()
        )
    )


def project_visibility_clause(user: UserModel) -> ColumnElement[bool]:
    email = user.email.lower()
    role = user.role

    if role in (UserRole.SUPER_ADMIN.value, UserRole.MANAGER.value):
        return true()
    if role == UserRole.ADMIN.value:
        return ProjectModel.created_by_id == user.id
    if role == UserRole.CONTRACTOR.value:
        return func.lower(ProjectModel.contact_email) == email
    if role == UserRole.SUBCONTRACTOR.value:
        return ProjectModel.id.in_(
            select(ProjectContractorModel.project_id)
            .join(ContractorModel, ContractorModel.id == ProjectContractorModel.contractor_id)
            .where(func.lower(ContractorModel.email) == email)
        )
    if role == UserRole.BROKER.value:
        return ProjectModel.id.in_(
            select(ProjectContractorModel.project_id)
            .join(ContractorModel, ContractorModel.id == ProjectContractorModel.contractor_id)
            .where(broker_email_clause(email))
        )
    return false()
