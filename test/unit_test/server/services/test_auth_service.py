from datetime import timedelta

import pytest

from lanmic_site.core.database.base import utc_now
from lanmic_site.server.services.auth_service import AuthService, check_otp
from lanmic_site.server.services.errors import BadRequestError, ConflictError, UnauthorizedError


class TestCheckOtp:
    def test_valid(self):
        check_otp("123456", utc_now() + timedelta(minutes=1), "123456")

    def test_missing(self):
        with pytest.raises(BadRequestError, match="No OTP found for this user"):
            check_otp(None, None, "123456")

    def test_mismatch(self):
        with pytest.raises(BadRequestError, match="Invalid OTP"):
            check_otp("123456", utc_now() + timedelta(minutes=1), "654321")

    def test_expired(self):
        with pytest.raises(BadRequestError, match="OTP has expired"):
            check_otp("123456", utc_now() - timedelta(seconds=1), "123456")

    def test_non_ascii_digits_are_a_mismatch(self):
        with pytest.raises(BadRequestError, match="Invalid OTP"):
            check_otp("123456", utc_now() + timedelta(minutes=1), "\uff11\uff12\uff13\uff14\uff15\uff16")

    def test_naive_expiry_is_read_as_utc(self):
        check_otp("123456", (utc_now() + timedelta(minutes=1)).replace(tzinfo=None), "123456")
        with pytest.raises(BadRequestError, match="OTP has expired"):
            check_otp("123456", (utc_now() - timedelta(seconds=1)).replace(tzinfo=None), "123456")


class TestAuthService:
    @pytest.mark.asyncio
    async def test_registration_stores_lowercase_email(self, session, email_service):
        service = AuthService(session, email_service)
        minutes = await service.send_registration_otp("Mixed@Case.Test")

        assert minutes == 5
        user = await service.users.get_by_email("mixed@case.test")
        assert user.email == "mixed@case.test"
        assert user.is_verified is False
        assert email_service.otps["mixed@case.test"] == user.otp

    @pytest.mark.asyncio
    async def test_verified_email_conflict(self, session, email_service, make_user):
        user = await make_user()
        with pytest.raises(ConflictError):
            await AuthService(session, email_service).send_registration_otp(user.email)

    @pytest.mark.asyncio
    async def test_refresh_issues_new_pair(self, session, email_service, make_user):
        user = await make_user()
        service = AuthService(session, email_service)
        issued = await service.login(user.email, "Str0ng@Pass")

        rotated = await service.refresh(issued.refresh_token)

        assert rotated.refresh_token != issued.refresh_token
        assert (await service.tokens.get_by_token(issued.refresh_token)).is_revoked is True
        with pytest.raises(UnauthorizedError, match="revoked"):
            await service.refresh(issued.refresh_token)

    @pytest.mark.asyncio
    async def test_logout_ignores_foreign_token(self, session, email_service, make_user):
        owner = await make_user()
        intruder = await make_user(email="intruder@example.com", username="intruder")
        service = AuthService(session, email_service)
        issued = await service.login(owner.email, "Str0ng@Pass")

        await service.logout(intruder, issued.refresh_token)

        assert (await service.tokens.get_by_token(issued.refresh_token)).is_revoked is False

    @pytest.mark.asyncio
    async def test_logout_without_token_is_noop(self, session, email_service, make_user):
        user = await make_user()
        await AuthService(session, email_service).logout(user, None)

    @pytest.mark.asyncio
    async def test_send_current_email_otp_resets_pending_change(self, session, email_service, make_user):
        user = await make_user()
        user.pending_email = "stale@example.com"
        user.email_change_new_verified = True
        service = AuthService(session, email_service)

        await service.send_current_email_otp(user)

        assert user.pending_email is None
        assert user.email_change_new_verified is False
        assert user.email_change_otp == email_service.otps[user.email]
