"""Account service for test accounts and registration requests."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from tote_inventory.config import Settings
from tote_inventory.exceptions import (
    InvalidOperationException,
    RecordNotFoundException,
    ResourceConflictException,
)
from tote_inventory.models.user import PendingUser, PendingUserStatus, User, UserRole
from tote_inventory.services.base import BaseService

logger = logging.getLogger(__name__)

TEST_ACCOUNTS = (
    ("admin@test.local", "Test Admin", UserRole.ADMIN),
    ("user@test.local", "Test User", UserRole.USER),
)


@dataclass
class SeededAccounts:
    admin: User
    user: User


class AccountService(BaseService):
    """Service class for user accounts and registration approval."""

    def __init__(self, db: Session, config: Settings):
        super().__init__(db)
        self.config = config

    def seed_test_accounts(self) -> SeededAccounts:
        """Upsert the fixed admin and user test accounts (never in production)."""
        if self.config.is_production:
            raise InvalidOperationException("seed test accounts", "the application runs in production")

        seeded = []
        for email, name, role in TEST_ACCOUNTS:
            user = self.find_user_by_email(email)
            if user is None:
                user = User(email=email, name=name, role=role)
                self.db.add(user)
            else:
                user.role = role
            seeded.append(user)

        self.db.flush()
        logger.info("Seeded test accounts")
        return SeededAccounts(admin=seeded[0], user=seeded[1])

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise RecordNotFoundException("User", user_id)
        return user

    def find_user_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none()

    # Registration requests

    def create_registration_request(
        self, email: str, name: str, reason: str | None = None
    ) -> PendingUser:
        email = email.strip().lower()
        existing_request = self.db.execute(
            select(PendingUser).where(PendingUser.email == email)
        ).scalar_one_or_none()
        if existing_request is not None or self.find_user_by_email(email) is not None:
            raise ResourceConflictException("Registration", f"email {email}")

        request = PendingUser(email=email, name=name.strip(), reason=reason)
        self.db.add(request)
        self.db.flush()
        return request

    def get_pending_requests(self) -> list[PendingUser]:
        stmt = (
            select(PendingUser)
            .where(PendingUser.status == PendingUserStatus.PENDING)
            .order_by(PendingUser.created_at, PendingUser.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def approve_request(self, request_id: int) -> User:
        """Create a USER account for a pending request and mark it approved."""
        request = self._get_pending_request(request_id)
        if self.find_user_by_email(request.email) is not None:
            raise ResourceConflictException("User", f"email {request.email}")

        user = User(email=request.email, name=request.name, role=UserRole.USER)
        self.db.add(user)
        request.status = PendingUserStatus.APPROVED
        request.processed_at = datetime.now(UTC)
        self.db.flush()

        logger.info(f"Approved registration for {request.email}")
        return user

    def reject_request(self, request_id: int) -> PendingUser:
        request = self._get_pending_request(request_id)
        request.status = PendingUserStatus.REJECTED
        request.processed_at = datetime.now(UTC)
        self.db.flush()

        logger.info(f"Rejected registration for {request.email}")
        return request

    def _get_pending_request(self, request_id: int) -> PendingUser:
        request = self.db.get(PendingUser, request_id)
        if not request:
            raise RecordNotFoundException("Registration request", request_id)
        if request.status != PendingUserStatus.PENDING:
            raise InvalidOperationException(
                f"process registration request {request_id}", "it was already processed"
            )
        return request
