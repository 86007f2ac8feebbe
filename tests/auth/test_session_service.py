from __future__ import annotations

from datetime import timedelta

import pytest

from src.student_portal.student_portal.auth.local_repository import LocalSessionStateRepository
from src.student_portal.student_portal.auth.service import SessionService
from src.student_portal.student_portal.core.constants import AUTH_STORAGE_KEY
from src.student_portal.student_portal.core.enums import Role
from src.student_portal.student_portal.core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    EmailNotVerifiedError,
    InvalidOrExpiredTokenError,
    InvalidTokenError,
    StorageError,
    ValidationError,
)


def test_signup_verify_login_end_to_end(sessions, mailer):
    user = sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="student")

    assert [u.email for u in sessions.list_users()] == ["jane@x.com"]
    assert user.email_verified is False
    tokens = sessions.verification_tokens()
    assert list(tokens.values()) == ["jane@x.com"]
    token = next(iter(tokens))
    assert mailer.verifications == [("jane@x.com", token)]

    sessions.verify_email(token)
    assert sessions.get_user(user.id).email_verified is True
    assert sessions.verification_tokens() == {}

    logged_in = sessions.login("jane@x.com", "password1")
    assert sessions.is_authenticated
    assert logged_in.role == Role.STUDENT
    assert sessions.current_user == logged_in


def test_login_exposes_user_without_credential(sessions, verified_student):
    user = sessions.login("jane@x.com", "password1")

    assert not hasattr(user, "password")
    assert "password" not in user.to_dict()


def test_signup_then_login_requires_verification(sessions):
    sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="student")

    with pytest.raises(EmailNotVerifiedError):
        sessions.login("jane@x.com", "password1")
    with pytest.raises(EmailNotVerifiedError):
        sessions.login("jane@x.com", "password1")

    assert sessions.is_authenticated is False
    assert sessions.current_user is None


def test_login_rejects_malformed_email(sessions):
    with pytest.raises(ValidationError):
        sessions.login("not-an-email", "password1")


def test_login_wrong_password_raises(sessions, verified_student):
    with pytest.raises(AuthenticationError) as exc:
        sessions.login("jane@x.com", "wrong-password")

    assert not isinstance(exc.value, EmailNotVerifiedError)
    assert sessions.is_authenticated is False


def test_logout_clears_session(sessions, verified_student):
    sessions.login("jane@x.com", "password1")

    sessions.logout()

    assert sessions.is_authenticated is False
    assert sessions.current_user is None


@pytest.mark.parametrize(
    "name,email,password",
    [
        ("Jane Doe", "jane-at-x.com", "password1"),
        ("Jane Doe", "jane@x.com", "short"),
        ("Jane D0e", "jane@x.com", "password1"),
        ("   ", "jane@x.com", "password1"),
    ],
)
def test_signup_rejects_invalid_input(sessions, name, email, password):
    with pytest.raises(ValidationError):
        sessions.signup(name=name, email=email, password=password, role="student")

    assert sessions.list_users() == []
    assert sessions.verification_tokens() == {}


def test_signup_rejects_unknown_role(sessions):
    with pytest.raises(ValidationError):
        sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="janitor")


def test_signup_duplicate_email(sessions, verified_student):
    with pytest.raises(DuplicateEmailError):
        sessions.signup(name="Other Jane", email="jane@x.com", password="password2", role="faculty")

    assert len(sessions.list_users()) == 1


def test_signup_does_not_log_in(sessions):
    sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="student")

    assert sessions.is_authenticated is False


def test_verify_email_unknown_token(sessions):
    with pytest.raises(InvalidTokenError):
        sessions.verify_email("nope")


def test_request_password_reset_does_not_reveal_accounts(sessions, verified_student, mailer, fixed_now):
    assert sessions.request_password_reset("ghost@x.com", now=fixed_now) is None
    assert sessions.reset_tokens() == {}

    assert sessions.request_password_reset("jane@x.com", now=fixed_now) is None
    tokens = sessions.reset_tokens()
    assert len(tokens) == 1
    reset = next(iter(tokens.values()))
    assert reset.email == "jane@x.com"
    assert reset.expires_at == fixed_now + timedelta(hours=1)
    assert len(mailer.resets) == 1


def test_reset_password_changes_credential_once(sessions, verified_student, mailer, fixed_now):
    sessions.request_password_reset("jane@x.com", now=fixed_now)
    token = mailer.resets[-1][1]

    sessions.reset_password(token, "new-password", now=fixed_now + timedelta(minutes=5))

    assert sessions.reset_tokens() == {}
    with pytest.raises(AuthenticationError):
        sessions.login("jane@x.com", "password1")
    assert sessions.login("jane@x.com", "new-password").email == "jane@x.com"

    with pytest.raises(InvalidOrExpiredTokenError):
        sessions.reset_password(token, "another-password", now=fixed_now + timedelta(minutes=6))


def test_reset_password_after_expiry_fails(sessions, verified_student, mailer, fixed_now):
    sessions.request_password_reset("jane@x.com", now=fixed_now)
    token = mailer.resets[-1][1]

    with pytest.raises(InvalidOrExpiredTokenError):
        sessions.reset_password(token, "new-password", now=fixed_now + timedelta(hours=1, seconds=1))

    assert sessions.login("jane@x.com", "password1")


def test_reset_password_enforces_minimum_length(sessions, verified_student, mailer, fixed_now):
    sessions.request_password_reset("jane@x.com", now=fixed_now)
    token = mailer.resets[-1][1]

    with pytest.raises(ValidationError):
        sessions.reset_password(token, "short", now=fixed_now)

    assert token in sessions.reset_tokens()


def test_purge_expired_reset_tokens(sessions, verified_student, fixed_now):
    sessions.request_password_reset("jane@x.com", now=fixed_now)
    sessions.request_password_reset("jane@x.com", now=fixed_now + timedelta(minutes=50))

    purged = sessions.purge_expired_reset_tokens(now=fixed_now + timedelta(minutes=90))

    assert purged == 1
    assert len(sessions.reset_tokens()) == 1


def test_update_profile_merges_fields_and_refreshes_session(sessions, verified_student):
    sessions.login("jane@x.com", "password1")

    updated = sessions.update_profile(verified_student.id, name="Jane Smith")

    assert updated.name == "Jane Smith"
    assert updated.email == "jane@x.com"
    assert sessions.current_user.name == "Jane Smith"


def test_update_profile_unknown_user_is_noop(sessions, verified_student):
    assert sessions.update_profile("missing", name="Nobody") is None
    assert sessions.get_user(verified_student.id).name == "Jane Doe"


def test_update_profile_rejects_unknown_fields(sessions, verified_student):
    with pytest.raises(ValidationError):
        sessions.update_profile(verified_student.id, favourite_colour="blue")


def test_state_survives_restart(storage, mailer, verified_student, sessions):
    sessions.login("jane@x.com", "password1")

    restarted = SessionService(LocalSessionStateRepository(storage), mailer)

    assert restarted.is_authenticated
    assert restarted.current_user.email == "jane@x.com"
    assert restarted.login("jane@x.com", "password1").id == verified_student.id
    assert storage.get_item(AUTH_STORAGE_KEY)["registry"][0]["password"] == "password1"


class FailingRepo:
    def __init__(self):
        self.saves = 0

    def load(self):
        from src.student_portal.student_portal.auth.model import SessionState

        return SessionState()

    def save(self, state):
        self.saves += 1
        raise StorageError("disk full")


def test_storage_failure_is_reported_separately(mailer):
    repo = FailingRepo()
    sessions = SessionService(repo, mailer)

    with pytest.raises(StorageError):
        sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="student")

    # the in-memory change stands; only the snapshot failed
    assert [u.email for u in sessions.list_users()] == ["jane@x.com"]
    assert repo.saves == 1
    # the issued token still reaches the user
    assert [email for email, _ in mailer.verifications] == ["jane@x.com"]
    assert mailer.verifications[0][1] in sessions.verification_tokens()


def test_reset_email_sent_even_when_save_fails(mailer, fixed_now):
    repo = FailingRepo()
    sessions = SessionService(repo, mailer)
    with pytest.raises(StorageError):
        sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="student")

    with pytest.raises(StorageError):
        sessions.request_password_reset("jane@x.com", now=fixed_now)

    assert len(mailer.resets) == 1
    assert mailer.resets[0][1] in sessions.reset_tokens()


def test_update_profile_rejects_email_of_another_user(sessions, verified_student):
    bob = sessions.signup(name="Bob", email="bob@x.com", password="password2", role="faculty")

    with pytest.raises(DuplicateEmailError):
        sessions.update_profile(bob.id, email="jane@x.com")

    assert sorted(u.email for u in sessions.list_users()) == ["bob@x.com", "jane@x.com"]
    # keeping one's own email is fine
    assert sessions.update_profile(bob.id, email="bob@x.com").email == "bob@x.com"


def test_signup_accepts_special_use_domain(sessions):
    user = sessions.signup(name="Jane Doe", email="jane@school.local", password="password1", role="student")
    assert user.email == "jane@school.local"


def test_signup_name_must_be_ascii_letters(sessions):
    with pytest.raises(ValidationError):
        sessions.signup(name="Zoë Ådams", email="zoe@x.com", password="password1", role="student")


def test_corrupted_non_object_snapshot_reports_storage_error(storage, mailer):
    storage.set_item(AUTH_STORAGE_KEY, ["not", "an", "object"])

    with pytest.raises(StorageError):
        SessionService(LocalSessionStateRepository(storage), mailer)
