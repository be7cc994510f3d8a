"""Tests for registration, email verification and the email senders."""
import logging
from types import SimpleNamespace

import pytest

from kosaquest.domain.accounts.services import UserService, generate_verification_code
from kosaquest.domain.common.errors import BadRequestError
from kosaquest.infra.db.repositories.user_repo import UserRepositoryImpl
from kosaquest.infra.messaging import email_base
from kosaquest.infra.messaging.email_base import ConsoleEmailService, SendGridEmailService


def test_verification_code_is_six_digits():
    for _ in range(50):
        code = generate_verification_code()
        assert len(code) == 6
        assert 100000 <= int(code) <= 999999


class TestVerifyEmail:
    async def test_register_stores_pending_code(self, db_session):
        user = await UserService(UserRepositoryImpl(db_session)).register(
            email="Kemi@Example.com", name="Kemi", password_hash="x"
        )
        assert user.is_email_verified is False
        assert user.verification_code is not None

    async def test_verify_sets_flag_and_clears_code(self, db_session):
        service = UserService(UserRepositoryImpl(db_session))
        user = await service.register(email="kemi@example.com", name="Kemi", password_hash="x")

        verified = await service.verify_email("KEMI@example.com", f" {user.verification_code} ")
        assert verified.is_email_verified is True
        assert verified.verification_code is None

        stored = await UserRepositoryImpl(db_session).get_by_id(user.id)
        assert stored.is_email_verified is True
        assert stored.verification_code is None

    async def test_wrong_code_leaves_user_unverified(self, db_session):
        service = UserService(UserRepositoryImpl(db_session))
        user = await service.register(email="kemi@example.com", name="Kemi", password_hash="x")
        wrong = "000000" if user.verification_code != "000000" else "111111"

        with pytest.raises(BadRequestError):
            await service.verify_email("kemi@example.com", wrong)
        stored = await UserRepositoryImpl(db_session).get_by_id(user.id)
        assert stored.is_email_verified is False
        assert stored.verification_code == user.verification_code

    async def test_non_ascii_code_is_rejected(self, db_session):
        service = UserService(UserRepositoryImpl(db_session))
        await service.register(email="kemi@example.com", name="Kemi", password_hash="x")
        with pytest.raises(BadRequestError):
            await service.verify_email("kemi@example.com", "١٢٣٤٥٦")


class TestEmailServices:
    async def test_console_service_logs_code(self, caplog):
        with caplog.at_level(logging.INFO, logger=email_base.__name__):
            await ConsoleEmailService().send_verification_code("kemi@example.com", "123456")
        assert "123456" in caplog.text

    def test_console_service_without_api_key(self, monkeypatch):
        monkeypatch.setattr(email_base, "settings", SimpleNamespace(sendgrid_api_key=""))
        assert isinstance(email_base.get_email_service(), ConsoleEmailService)

    def test_sendgrid_service_with_api_key(self, monkeypatch):
        monkeypatch.setattr(
            email_base,
            "settings",
            SimpleNamespace(
                sendgrid_api_key="SG.key",
                email_from_address="noreply@kosaquest.app",
                email_from_name="KosaQuest",
            ),
        )
        service = email_base.get_email_service()
        assert isinstance(service, SendGridEmailService)
        assert service.api_key == "SG.key"

    @pytest.mark.parametrize("status_code,fails", [(202, False), (500, True)])
    async def test_sendgrid_send(self, monkeypatch, status_code, fails):
        sent = []

        class StubClient:
            def __init__(self, api_key):
                self.api_key = api_key

            def send(self, message):
                sent.append((self.api_key, message))
                return SimpleNamespace(status_code=status_code)

        monkeypatch.setattr(email_base, "SendGridAPIClient", StubClient)
        service = SendGridEmailService("SG.key", "noreply@kosaquest.app", "KosaQuest")

        if fails:
            with pytest.raises(RuntimeError):
                await service.send_verification_code("kemi@example.com", "123456")
        else:
            await service.send_verification_code("kemi@example.com", "123456")
        assert len(sent) == 1
        assert sent[0][0] == "SG.key"
