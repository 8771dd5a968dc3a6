"""Tests for test account seeding and registration approval."""

import pytest
from flask import Flask
from sqlalchemy.orm import Session

from tote_inventory.exceptions import (
    InvalidOperationException,
    RecordNotFoundException,
    ResourceConflictException,
)
from tote_inventory.models.user import PendingUserStatus, User, UserRole
from tote_inventory.services.account_service import AccountService


@pytest.fixture
def account_service(container):
    return container.account_service()


class TestSeedTestAccounts:
    def test_seed_creates_both_roles(self, app: Flask, session: Session, account_service):
        with app.app_context():
            accounts = account_service.seed_test_accounts()

            assert accounts.admin.email == "admin@test.local"
            assert accounts.admin.role == UserRole.ADMIN
            assert accounts.user.email == "user@test.local"
            assert accounts.user.role == UserRole.USER

    def test_seed_is_idempotent(self, app: Flask, session: Session, account_service):
        with app.app_context():
            first = account_service.seed_test_accounts()
            second = account_service.seed_test_accounts()

            assert first.admin.id == second.admin.id
            assert session.query(User).count() == 2

    def test_refused_in_production(self, app: Flask, session: Session, test_settings):
        with app.app_context():
            production = test_settings.model_copy(update={"FLASK_ENV": "production"})
            service = AccountService(session, production)

            with pytest.raises(InvalidOperationException):
                service.seed_test_accounts()


class TestRegistrationRequests:
    """Test cases for the pending user workflow."""

    def test_approve_creates_user(self, app: Flask, session: Session, account_service):
        with app.app_context():
            request = account_service.create_registration_request(" New@Example.com ", "New Person", "family")

            user = account_service.approve_request(request.id)

            assert user.email == "new@example.com"
            assert user.role == UserRole.USER
            assert request.status == PendingUserStatus.APPROVED
            assert request.processed_at is not None
            assert account_service.get_pending_requests() == []

    def test_reject(self, app: Flask, session: Session, account_service):
        with app.app_context():
            request = account_service.create_registration_request("someone@example.com", "Someone")

            account_service.reject_request(request.id)

            assert request.status == PendingUserStatus.REJECTED
            assert account_service.find_user_by_email("someone@example.com") is None

    def test_processed_request_cannot_be_processed_again(
        self, app: Flask, session: Session, account_service
    ):
        with app.app_context():
            request = account_service.create_registration_request("someone@example.com", "Someone")
            account_service.reject_request(request.id)

            with pytest.raises(InvalidOperationException):
                account_service.approve_request(request.id)

    def test_duplicate_email_conflicts(self, app: Flask, session: Session, account_service):
        with app.app_context():
            account_service.seed_test_accounts()

            with pytest.raises(ResourceConflictException):
                account_service.create_registration_request("admin@test.local", "Impostor")

    def test_unknown_request(self, app: Flask, session: Session, account_service):
        with app.app_context():
            with pytest.raises(RecordNotFoundException):
                account_service.approve_request(999)
