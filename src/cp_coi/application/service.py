"""COIService — generated COI lifecycle.

Status changes go through ``state_machine.next_status``. Approval also
generates the hold harmless agreement in the same transaction; when that
fails the approval is rolled back and the COI is parked in
AWAITING_ADMIN_REVIEW with a note for the reviewer.
"""

import html
import logging
import uuid
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_audit.application.service import AuditService
from src.cp_audit.domain.models import AuditEntry
from src.cp_coi.application.broker_info import validate_broker_info
from src.cp_coi.application.schemas import (
    BrokerInfoRequest,
    BrokerInfoResponse,
    COICreate,
    COIItem,
    ReviewCOIRequest,
    SignPoliciesRequest,
    UploadPoliciesRequest,
)
from src.cp_coi.domain.policies import (
    BROKER_INFO_FIELDS,
    EXPIRATION_FIELDS,
    POLICY_URL_FIELDS,
    SIGNATURE_URL_FIELDS,
)
from src.cp_coi.domain.repository import COIRepositoryProtocol
from src.cp_coi.domain.state_machine import RENEWAL_STATUS, COIAction, next_status
from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_coi.infrastructure.persistence import COIRepository
from src.cp_common.datetime_utils import start_of_day, utc_now
from src.cp_common.enums import AuditAction, AuditResource, COIStatus
from src.cp_common.errors import (
    COINotFoundError,
    ContractorNotFoundError,
    HoldHarmlessGenerationFailedError,
    ProjectNotFoundError,
)
from src.cp_contractors.domain.repository import ContractorRepositoryProtocol
from src.cp_contractors.infrastructure.persistence import ContractorRepository
from src.cp_gateway.user.db_models import UserModel
from src.cp_hold_harmless.application.service import HoldHarmlessService
from src.cp_notifications.application.service import NotificationService
from src.cp_notifications.infrastructure.mailer import Mailer, get_mailer
from src.cp_projects.domain.repository import ProjectRepositoryProtocol
from src.cp_projects.infrastructure.persistence import ProjectRepository
from src.cp_users.application.schemas import BrokerAccount
from src.cp_users.application.service import BrokerProvision, UserAdminService
from src.cp_users.domain.repository import UserRepositoryProtocol
from src.cp_users.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)

ROLLBACK_NOTE = "Auto-rollback: Hold harmless generation failed - please retry approval."

# Copied from the subcontractor's first ACTIVE COI onto a COI for a new project.
_MASTER_COPY_FIELDS = (
    *BROKER_INFO_FIELDS,
    *POLICY_URL_FIELDS,
    *SIGNATURE_URL_FIELDS,
    *EXPIRATION_FIELDS,
    "first_coi_url",
    "first_coi_uploaded",
    "gc_name",
    "subcontractor_name",
)


def rollback_notes(reviewer_notes: str | None) -> str:
    if reviewer_notes:
        return f"{reviewer_notes}\n\n{ROLLBACK_NOTE}"
    return ROLLBACK_NOTE


class COIService:
    def __init__(
        self,
        repo: COIRepositoryProtocol | None = None,
        project_repo: ProjectRepositoryProtocol | None = None,
        contractor_repo: ContractorRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        users: UserAdminService | None = None,
        hold_harmless: HoldHarmlessService | None = None,
        notifications: NotificationService | None = None,
        audit: AuditService | None = None,
        mailer: Mailer | None = None,
    ) -> None:
        self._repo: COIRepositoryProtocol = repo or COIRepository()
        self._projects: ProjectRepositoryProtocol = project_repo or ProjectRepository()
        self._contractors: ContractorRepositoryProtocol = contractor_repo or ContractorRepository()
        self._user_repo: UserRepositoryProtocol = user_repo or UserRepository()
        self._users = users or UserAdminService(repo=self._user_repo)
        self._hold_harmless = hold_harmless or HoldHarmlessService()
        self._notifications = notifications or NotificationService(user_repo=self._user_repo)
        self._audit = audit or AuditService()
        self._mailer = mailer

    @property
    def mailer(self) -> Mailer:
        return self._mailer or get_mailer()

    # ------------------------------------------------------------------
    # Create / renew
    # ------------------------------------------------------------------

    async def create(self, db: AsyncSession, actor: UserModel, body: COICreate) -> COIItem:
        project = await self._projects.get_by_id(db, body.project_id)
        if project is None:
            raise ProjectNotFoundError(str(body.project_id))
        subcontractor = await self._contractors.get_by_id(db, body.subcontractor_id)
        if subcontractor is None:
            raise ContractorNotFoundError(str(body.subcontractor_id))

        master = await self._repo.earliest_active_for_subcontractor(db, subcontractor.id)
        coi = GeneratedCOIModel(
            project_id=project.id,
            subcontractor_id=subcontractor.id,
            assigned_admin_email=body.assigned_admin_email,
            project_name=project.name,
        )
        if master is not None:
            for field_name in _MASTER_COPY_FIELDS:
                setattr(coi, field_name, getattr(master, field_name))
            coi.status = COIStatus.AWAITING_ADMIN_REVIEW.value
            coi.deficiency_notes = (
                f"ACORD 25 auto-generated from first ACORD (ID: {master.id}) for new project."
            )
        else:
            coi.status = COIStatus.AWAITING_BROKER_INFO.value
            coi.gc_name = project.gc_name
            coi.subcontractor_name = subcontractor.name

        try:
            coi = await self._repo.add(db, coi)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "COI %s created for project %s (master=%s)",
            coi.id,
            project.id,
            master.id if master else None,
        )
        await self._audit.log(
            AuditEntry(
                action=AuditAction.CREATE.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(coi.id),
                metadata={
                    "status": coi.status,
                    "master_coi_id": str(master.id) if master else None,
                },
            )
        )
        return COIItem.model_validate(coi)

    async def renew(self, db: AsyncSession, actor: UserModel, coi_id: uuid.UUID) -> COIItem:
        old = await self._get(db, coi_id)
        next_status(old.status, COIAction.RENEW)

        renewal = GeneratedCOIModel(
            project_id=old.project_id,
            subcontractor_id=old.subcontractor_id,
            assigned_admin_email=old.assigned_admin_email,
            status=RENEWAL_STATUS.value,
            gc_name=old.gc_name,
            project_name=old.project_name,
            subcontractor_name=old.subcontractor_name,
        )
        for field_name in BROKER_INFO_FIELDS:
            setattr(renewal, field_name, getattr(old, field_name))

        try:
            renewal = await self._repo.add(db, renewal)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("COI %s renewed as %s", coi_id, renewal.id)
        await self._audit.log(
            AuditEntry(
                action=AuditAction.CREATE.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(renewal.id),
                metadata={"renewed_from": str(coi_id)},
            )
        )
        return COIItem.model_validate(renewal)

    # ------------------------------------------------------------------
    # Broker steps
    # ------------------------------------------------------------------

    async def update_broker_info(
        self,
        db: AsyncSession,
        actor: UserModel,
        coi_id: uuid.UUID,
        body: BrokerInfoRequest,
    ) -> BrokerInfoResponse:
        coi = await self._get(db, coi_id)
        target = next_status(coi.status, COIAction.UPDATE_BROKER_INFO)
        pairs = validate_broker_info(body)

        provisions: list[BrokerProvision] = []
        try:
            for email, name in pairs:
                provisions.append(await self._users.ensure_broker_account(db, email, name))
            values = body.model_dump(include=set(BROKER_INFO_FIELDS))
            for field_name, value in values.items():
                if field_name == "broker_type":
                    value = body.broker_type.value
                elif isinstance(value, str) and field_name.endswith("_email"):
                    value = value.lower()
                setattr(coi, field_name, value)
            coi.status = target.value
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        for provision in provisions:
            if provision.created:
                await self._send_broker_credentials(provision)

        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPDATE.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(coi.id),
                changes={"status": coi.status, "broker_type": coi.broker_type},
                metadata={"brokers_created": sum(p.created for p in provisions)},
            )
        )
        return BrokerInfoResponse(
            coi=COIItem.model_validate(coi),
            broker_accounts=[BrokerAccount(email=p.email, created=p.created) for p in provisions],
        )

    async def _send_broker_credentials(self, provision: BrokerProvision) -> None:
        body = (
            "<h2>Your broker account</h2>"
            "<p>An account was created so you can upload and sign certificates of insurance.</p>"
            f"<p>Email: {html.escape(provision.email)}<br>"
            f"Temporary password: {html.escape(provision.password or '')}</p>"
            f'<p><a href="{settings.FRONTEND_URL}/login">Sign in</a> and change your password.</p>'
        )
        try:
            if not await self.mailer.send(provision.email, "Your broker account", body):
                logger.warning("Broker credentials email to %s was not delivered", provision.email)
        except Exception:
            logger.warning("Broker credentials email to %s failed", provision.email, exc_info=True)

    async def upload_policies(
        self,
        db: AsyncSession,
        actor: UserModel,
        coi_id: uuid.UUID,
        body: UploadPoliciesRequest,
    ) -> COIItem:
        coi = await self._get(db, coi_id)
        target = next_status(coi.status, COIAction.UPLOAD_POLICIES)
        try:
            for field_name, value in body.model_dump(exclude_none=True).items():
                setattr(coi, field_name, value)
            if body.first_coi_url:
                coi.first_coi_uploaded = True
            coi.status = target.value
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPLOAD.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(coi.id),
                changes={"status": coi.status},
            )
        )
        return COIItem.model_validate(coi)

    async def sign_policies(
        self,
        db: AsyncSession,
        actor: UserModel,
        coi_id: uuid.UUID,
        body: SignPoliciesRequest,
    ) -> COIItem:
        coi = await self._get(db, coi_id)
        target = next_status(coi.status, COIAction.SIGN_POLICIES)
        try:
            for field_name, value in body.model_dump(exclude_none=True).items():
                setattr(coi, field_name, value)
            coi.status = target.value
            if coi.assigned_admin_email:
                admin = await self._user_repo.get_by_email(db, coi.assigned_admin_email)
                if admin is not None:
                    await self._notifications.notify_approval_required(db, admin.id, coi.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPDATE.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(coi.id),
                changes={"status": coi.status},
            )
        )
        return COIItem.model_validate(coi)

    async def resubmit(self, db: AsyncSession, actor: UserModel, coi_id: uuid.UUID) -> COIItem:
        coi = await self._get(db, coi_id)
        target = next_status(coi.status, COIAction.RESUBMIT)
        try:
            coi.status = target.value
            coi.deficiency_notes = None
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPDATE.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(coi.id),
                changes={"status": coi.status},
            )
        )
        return COIItem.model_validate(coi)

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    async def review(
        self,
        db: AsyncSession,
        actor: UserModel,
        coi_id: uuid.UUID,
        body: ReviewCOIRequest,
    ) -> COIItem:
        coi = await self._get(db, coi_id)
        if body.approved:
            return await self._approve(db, actor, coi, body.deficiency_notes)

        target = next_status(coi.status, COIAction.REJECT)
        try:
            coi.status = target.value
            coi.deficiency_notes = body.deficiency_notes
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.REJECT.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(coi.id),
                changes={"status": coi.status},
                metadata={"deficiency_notes": body.deficiency_notes},
            )
        )
        return COIItem.model_validate(coi)

    async def _approve(
        self,
        db: AsyncSession,
        actor: UserModel,
        coi: GeneratedCOIModel,
        notes: str | None,
    ) -> COIItem:
        coi_id = coi.id
        target = next_status(coi.status, COIAction.APPROVE)
        try:
            coi.status = target.value
            coi.deficiency_notes = notes
            await db.flush()
            await self._hold_harmless.generate_for_coi(db, coi_id)
            await db.commit()
        except Exception as exc:
            await db.rollback()
            logger.error("Hold harmless generation failed for COI %s: %s", coi_id, exc)
            await self._park_for_retry(db, coi_id, notes)
            detail = getattr(exc, "message", None) or str(exc) or type(exc).__name__
            raise HoldHarmlessGenerationFailedError(detail) from exc

        logger.info("COI %s approved", coi_id)
        await self._audit.log(
            AuditEntry(
                action=AuditAction.APPROVE.value,
                resource=AuditResource.COI.value,
                user_id=str(actor.id),
                resource_id=str(coi_id),
                changes={"status": coi.status},
                metadata={"hold_harmless_status": coi.hold_harmless_status},
            )
        )
        return COIItem.model_validate(coi)

    async def _park_for_retry(
        self, db: AsyncSession, coi_id: uuid.UUID, notes: str | None
    ) -> None:
        try:
            coi = await self._repo.get_by_id(db, coi_id)
            if coi is None:
                return
            coi.status = COIStatus.AWAITING_ADMIN_REVIEW.value
            coi.deficiency_notes = rollback_notes(notes)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error("Could not record approval rollback on COI %s", coi_id, exc_info=True)

    # ------------------------------------------------------------------
    # Scheduled
    # ------------------------------------------------------------------

    async def expire_lapsed_cois(self, db: AsyncSession, today: date) -> int:
        """Move ACTIVE COIs with any policy expired before today to EXPIRED."""
        try:
            lapsed = await self._repo.list_lapsed(db, start_of_day(today))
            for coi in lapsed:
                coi.status = next_status(coi.status, COIAction.EXPIRE).value
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if lapsed:
            logger.info("Expired %d lapsed COIs", len(lapsed))
        return len(lapsed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_cois(self, db: AsyncSession, user: UserModel) -> list[COIItem]:
        rows = await self._repo.list_visible(db, user)
        return [COIItem.model_validate(r) for r in rows]

    async def get(self, db: AsyncSession, coi_id: uuid.UUID) -> COIItem:
        return COIItem.model_validate(await self._get(db, coi_id))

    async def expiring(self, db: AsyncSession, days: int = 30) -> list[COIItem]:
        now = utc_now()
        rows = await self._repo.list_expiring(db, now, now + timedelta(days=days))
        return [COIItem.model_validate(r) for r in rows]

    async def _get(self, db: AsyncSession, coi_id: uuid.UUID) -> GeneratedCOIModel:
        coi = await self._repo.get_by_id(db, coi_id)
        if coi is None:
            raise COINotFoundError(str(coi_id))
        return coi
