"""HoldHarmlessService — agreement generation and two-party signing.

Flow:
    COI approved -> agreement generated (PENDING_SUB_SIGNATURE), sub emailed
    sub signs    -> PENDING_GC_SIGNATURE, GC emailed
    GC signs     -> COMPLETED, COI gets the final document, parties notified

The agreement status is mirrored onto the COI's hold_harmless_status.
Signing links carry a 64-hex token so signers do not need an account.
"""

import logging
import secrets
import uuid
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_coi.domain.repository import COIRepositoryProtocol
from src.cp_coi.infrastructure.persistence import COIRepository
from src.cp_common.datetime_utils import utc_now
from src.cp_common.enums import HoldHarmlessStatus
from src.cp_common.errors import (
    COINotFoundError,
    EmailDeliveryError,
    HoldHarmlessInvalidStateError,
    HoldHarmlessNotFoundError,
    HoldHarmlessTemplateMissingError,
    ProjectNotFoundError,
)
from src.cp_contractors.domain.repository import ContractorRepositoryProtocol
from src.cp_contractors.infrastructure.persistence import ContractorRepository
from src.cp_hold_harmless.application.schemas import (
    GCSignRequest,
    HoldHarmlessItem,
    HoldHarmlessStats,
    SubcontractorSignRequest,
    TokenLookupResponse,
)
from src.cp_hold_harmless.domain.repository import HoldHarmlessRepositoryProtocol
from src.cp_hold_harmless.infrastructure.db_models import HoldHarmlessModel
from src.cp_hold_harmless.infrastructure.persistence import HoldHarmlessRepository
from src.cp_notifications.infrastructure.mailer import Mailer, get_mailer
from src.cp_programs.domain.repository import ProgramRepositoryProtocol
from src.cp_programs.infrastructure.persistence import ProgramRepository
from src.cp_projects.domain.insureds import additional_insureds_for
from src.cp_projects.domain.repository import ProjectRepositoryProtocol
from src.cp_projects.infrastructure.persistence import ProjectRepository

logger = logging.getLogger(__name__)

SIGNATURE_TOKEN_BYTES = 32

_PENDING = (
    HoldHarmlessStatus.PENDING_SUB_SIGNATURE.value,
    HoldHarmlessStatus.PENDING_GC_SIGNATURE.value,
)


def sub_signing_link(agreement_id: uuid.UUID) -> str:
    return f"{settings.FRONTEND_URL}/subcontractor/hold-harmless/{agreement_id}"


def gc_signing_link(agreement_id: uuid.UUID) -> str:
    return f"{settings.FRONTEND_URL}/gc/hold-harmless/{agreement_id}"


class HoldHarmlessService:
    def __init__(
        self,
        repo: HoldHarmlessRepositoryProtocol | None = None,
        coi_repo: COIRepositoryProtocol | None = None,
        project_repo: ProjectRepositoryProtocol | None = None,
        program_repo: ProgramRepositoryProtocol | None = None,
        contractor_repo: ContractorRepositoryProtocol | None = None,
        mailer: Mailer | None = None,
    ) -> None:
        self._repo: HoldHarmlessRepositoryProtocol = repo or HoldHarmlessRepository()
        self._cois: COIRepositoryProtocol = coi_repo or COIRepository()
        self._projects: ProjectRepositoryProtocol = project_repo or ProjectRepository()
        self._programs: ProgramRepositoryProtocol = program_repo or ProgramRepository()
        self._contractors: ContractorRepositoryProtocol = contractor_repo or ContractorRepository()
        self._mailer = mailer

    @property
    def mailer(self) -> Mailer:
        return self._mailer or get_mailer()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate_for_coi(
        self, db: AsyncSession, coi_id: uuid.UUID
    ) -> HoldHarmlessModel | None:
        """Create the agreement for an approved COI inside the caller's transaction.

        Returns None when the project's program does not require one. Raises on
        a missing template or a failed subcontractor email; the caller rolls back.
        """
        coi = await self._cois.get_by_id(db, coi_id)
        if coi is None:
            raise COINotFoundError(str(coi_id))

        existing = await self._repo.get_by_coi(db, coi_id)
        if existing is not None:
            return existing

        project = await self._projects.get_by_id(db, coi.project_id)
        if project is None:
            raise ProjectNotFoundError(str(coi.project_id))

        program = await self._programs.first_program_for_project(db, project.id)
        if program is None or not program.requires_hold_harmless:
            logger.info("No hold harmless required for COI %s", coi_id)
            return None
        if not program.hold_harmless_template_url:
            raise HoldHarmlessTemplateMissingError(program.name)

        subcontractor = await self._contractors.get_by_id(db, coi.subcontractor_id)
        agreement = await self._repo.add(
            db,
            HoldHarmlessModel(
                coi_id=coi.id,
                program_id=program.id,
                template_url=program.hold_harmless_template_url,
                status=HoldHarmlessStatus.PENDING_SUB_SIGNATURE.value,
                project_address=project.address,
                gc_name=project.gc_name or coi.gc_name,
                gc_email=project.contact_email,
                owners_entity=project.entity,
                additional_insureds=additional_insureds_for(project),
                subcontractor_name=subcontractor.name if subcontractor else coi.subcontractor_name,
                subcontractor_email=subcontractor.email if subcontractor else None,
                sub_signature_token=secrets.token_hex(SIGNATURE_TOKEN_BYTES),
                notifications_sent=[],
            ),
        )
        coi.hold_harmless_status = HoldHarmlessStatus.PENDING_SUB_SIGNATURE.value

        if agreement.subcontractor_email:
            await self._send_or_raise(
                agreement.subcontractor_email,
                "Hold Harmless Agreement - Signature Required",
                self._sub_email(agreement),
            )
            agreement.sub_signature_link_sent_at = utc_now()
        else:
            logger.warning("Hold harmless %s has no subcontractor email", agreement.id)

        logger.info("Hold harmless %s generated for COI %s", agreement.id, coi_id)
        return agreement

    async def auto_generate_on_coi_approval(
        self, db: AsyncSession, coi_id: uuid.UUID
    ) -> HoldHarmlessItem | None:
        try:
            agreement = await self.generate_for_coi(db, coi_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return HoldHarmlessItem.model_validate(agreement) if agreement else None

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    async def sign_subcontractor(
        self, db: AsyncSession, agreement_id: uuid.UUID, body: SubcontractorSignRequest
    ) -> HoldHarmlessItem:
        agreement = await self._get(db, agreement_id)
        if agreement.status != HoldHarmlessStatus.PENDING_SUB_SIGNATURE.value:
            raise HoldHarmlessInvalidStateError("is not awaiting subcontractor signature")

        try:
            now = utc_now()
            agreement.sub_signature_url = body.signature_url
            agreement.sub_signed_by = body.signed_by
            agreement.sub_signed_at = now
            agreement.status = HoldHarmlessStatus.PENDING_GC_SIGNATURE.value
            agreement.gc_signature_token = secrets.token_hex(SIGNATURE_TOKEN_BYTES)
            await self._mirror_to_coi(db, agreement)
            if agreement.gc_email:
                await self._send_or_raise(
                    agreement.gc_email,
                    "Hold Harmless Agreement - GC Signature Required",
                    self._gc_email(agreement),
                )
                agreement.gc_signature_link_sent_at = now
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Hold harmless %s signed by subcontractor", agreement_id)
        return HoldHarmlessItem.model_validate(agreement)

    async def sign_gc(
        self, db: AsyncSession, agreement_id: uuid.UUID, body: GCSignRequest
    ) -> HoldHarmlessItem:
        agreement = await self._get(db, agreement_id)
        if agreement.status != HoldHarmlessStatus.PENDING_GC_SIGNATURE.value:
            raise HoldHarmlessInvalidStateError("is not awaiting GC signature")

        try:
            now = utc_now()
            agreement.gc_signature_url = body.signature_url
            agreement.gc_signed_by = body.signed_by
            agreement.gc_signed_at = now
            agreement.final_doc_url = body.final_doc_url
            agreement.status = HoldHarmlessStatus.COMPLETED.value
            agreement.completed_at = now
            await self._mirror_to_coi(db, agreement, document_url=body.final_doc_url)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Hold harmless %s completed", agreement_id)

        await self._notify_completion(db, agreement)
        return HoldHarmlessItem.model_validate(agreement)

    async def _notify_completion(self, db: AsyncSession, agreement: HoldHarmlessModel) -> None:
        """Tell the subcontractor and GC the agreement is fully signed. Best effort."""
        recipients = [e for e in (agreement.subcontractor_email, agreement.gc_email) if e]
        sent: list[str] = []
        body = (
            "<h2>Hold Harmless Agreement Completed</h2>"
            f"<p>The hold harmless agreement for {agreement.project_address or 'your project'} "
            "has been signed by all parties.</p>"
            f'<p><a href="{agreement.final_doc_url}">Download the signed agreement</a></p>'
        )
        for email in dict.fromkeys(recipients):
            try:
                if await self.mailer.send(email, "Hold Harmless Agreement Completed", body):
                    sent.append(email)
            except Exception:
                logger.warning("Completion email to %s failed", email, exc_info=True)
        if not sent:
            return
        try:
            agreement.notifications_sent = [*(agreement.notifications_sent or []), *sent]
            agreement.notified_at = utc_now()
            await db.commit()
        except Exception:
            await db.rollback()
            logger.warning("Recording completion notifications failed", exc_info=True)

    async def resend(
        self, db: AsyncSession, agreement_id: uuid.UUID, party: Literal["SUB", "GC"]
    ) -> HoldHarmlessItem:
        agreement = await self._get(db, agreement_id)
        try:
            if party == "SUB":
                if agreement.status != HoldHarmlessStatus.PENDING_SUB_SIGNATURE.value:
                    raise HoldHarmlessInvalidStateError("is not awaiting subcontractor signature")
                if not agreement.subcontractor_email:
                    raise HoldHarmlessInvalidStateError("has no subcontractor email")
                await self._send_or_raise(
                    agreement.subcontractor_email,
                    "Reminder: Hold Harmless Agreement - Signature Required",
                    self._sub_email(agreement),
                )
                agreement.sub_signature_link_sent_at = utc_now()
            else:
                if agreement.status != HoldHarmlessStatus.PENDING_GC_SIGNATURE.value:
                    raise HoldHarmlessInvalidStateError("is not awaiting GC signature")
                if not agreement.gc_email:
                    raise HoldHarmlessInvalidStateError("has no GC email")
                await self._send_or_raise(
                    agreement.gc_email,
                    "Reminder: Hold Harmless Agreement - GC Signature Required",
                    self._gc_email(agreement),
                )
                agreement.gc_signature_link_sent_at = utc_now()
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return HoldHarmlessItem.model_validate(agreement)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get(self, db: AsyncSession, agreement_id: uuid.UUID) -> HoldHarmlessItem:
        return HoldHarmlessItem.model_validate(await self._get(db, agreement_id))

    async def get_by_token(self, db: AsyncSession, token: str) -> TokenLookupResponse:
        agreement = await self._repo.get_by_token(db, token)
        if agreement is None:
            raise HoldHarmlessNotFoundError("signature token")
        if token == agreement.sub_signature_token:
            party: Literal["SUBCONTRACTOR", "GC"] = "SUBCONTRACTOR"
            can_sign = agreement.status == HoldHarmlessStatus.PENDING_SUB_SIGNATURE.value
        else:
            party = "GC"
            can_sign = agreement.status == HoldHarmlessStatus.PENDING_GC_SIGNATURE.value
        return TokenLookupResponse(
            agreement=HoldHarmlessItem.model_validate(agreement),
            signing_party=party,
            can_sign=can_sign,
        )

    async def get_for_coi(self, db: AsyncSession, coi_id: uuid.UUID) -> HoldHarmlessItem:
        agreement = await self._repo.get_by_coi(db, coi_id)
        if agreement is None:
            raise HoldHarmlessNotFoundError(f"COI {coi_id}")
        return HoldHarmlessItem.model_validate(agreement)

    async def list_agreements(
        self,
        db: AsyncSession,
        status: str | None = None,
        pending_signature: bool = False,
    ) -> list[HoldHarmlessItem]:
        if pending_signature:
            statuses: list[str] | None = list(_PENDING)
        else:
            statuses = [status] if status else None
        rows = await self._repo.list_agreements(db, statuses)
        return [HoldHarmlessItem.model_validate(r) for r in rows]

    async def stats(self, db: AsyncSession) -> HoldHarmlessStats:
        counts = await self._repo.count_by_status(db)
        pending_sub = counts.get(HoldHarmlessStatus.PENDING_SUB_SIGNATURE.value, 0)
        pending_gc = counts.get(HoldHarmlessStatus.PENDING_GC_SIGNATURE.value, 0)
        return HoldHarmlessStats(
            total=sum(counts.values()),
            pending_sub_signature=pending_sub,
            pending_gc_signature=pending_gc,
            completed=counts.get(HoldHarmlessStatus.COMPLETED.value, 0),
            rejected=counts.get(HoldHarmlessStatus.REJECTED.value, 0),
            pending_total=pending_sub + pending_gc,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get(self, db: AsyncSession, agreement_id: uuid.UUID) -> HoldHarmlessModel:
        agreement = await self._repo.get_by_id(db, agreement_id)
        if agreement is None:
            raise HoldHarmlessNotFoundError(str(agreement_id))
        return agreement

    async def _mirror_to_coi(
        self,
        db: AsyncSession,
        agreement: HoldHarmlessModel,
        document_url: str | None = None,
    ) -> None:
        coi = await self._cois.get_by_id(db, agreement.coi_id)
        if coi is None:
            return
        coi.hold_harmless_status = agreement.status
        if document_url:
            coi.hold_harmless_document_url = document_url

    async def _send_or_raise(self, to: str, subject: str, html: str) -> None:
        if not await self.mailer.send(to, subject, html):
            raise EmailDeliveryError(to)

    @staticmethod
    def _sub_email(agreement: HoldHarmlessModel) -> str:
        return (
            "<h2>Hold Harmless Agreement - Signature Required</h2>"
            f"<p>Hello {agreement.subcontractor_name or 'Subcontractor'},</p>"
            f"<p>Your certificate of insurance for {agreement.project_address or 'the project'} "
            "has been approved. Please review and sign the hold harmless agreement.</p>"
            f'<p><a href="{sub_signing_link(agreement.id)}">Review and sign</a></p>'
        )

    @staticmethod
    def _gc_email(agreement: HoldHarmlessModel) -> str:
        return (
            "<h2>Hold Harmless Agreement - GC Signature Required</h2>"
            f"<p>Hello {agreement.gc_name or 'General Contractor'},</p>"
            f"<p>{agreement.subcontractor_name or 'The subcontractor'} has signed the hold "
            "harmless agreement. Please review and countersign.</p>"
            f'<p><a href="{gc_signing_link(agreement.id)}">Review and sign</a></p>'
        )
