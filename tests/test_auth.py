import string

from authdemo import auth
from authdemo.auth import (
    authenticate_user,
    generate_session_key,
    hash_password,
    validate_signup,
    verify_password,
)
from authdemo.models import User


def test_password_hashing():
    password = "secure_password_123"
    hashed = hash_password(password)

    assert hashed != password
    assert isinstance(hashed, str)
    # bcrypt with the default cost factor
    assert hashed.startswith("$2b$12$")


def test_password_verification_success():
    password = "secure_password_123"
    hashed = hash_password(password)

    assert verify_password(password, hashed) is True


def test_password_verification_failure():
    hashed = hash_password("secure_password_123")

    assert verify_password("wrong_password", hashed) is False


def test_password_long_truncation():
    # bcrypt handles max 72 bytes, longer passwords are truncated
    long_password = "a" * 100
    hashed = hash_password(long_password)

    assert verify_password(long_password, hashed) is True
    assert verify_password("a" * 72, hashed) is True
    assert verify_password("b" * 72, hashed) is False


def test_session_key_shape():
    key = generate_session_key()

    assert len(key) == 48
    assert set(key) <= set(string.ascii_letters + string.digits)


def test_session_keys_differ():
    keys = {generate_session_key() for _ in range(20)}
    assert len(keys) == 20


def test_authenticate_user_success(session, user):
    found = authenticate_user(session, "alice", "secret")

    assert found is not None
    assert found.id == user.id


def test_authenticate_user_wrong_password(session, user):
    assert authenticate_user(session, "alice", "wrong") is None


def test_authenticate_user_unknown_user(session, user):
    assert authenticate_user(session, "bob", "secret") is None


def test_authenticate_user_is_case_sensitive(session, user):
    assert authenticate_user(session, "Alice", "secret") is None


def test_authenticate_user_broken_hash(session):
    session.add(User(username="broken", realname="Broken", password="not-a-hash"))
    session.commit()

    assert authenticate_user(session, "broken", "anything") is None


def test_validate_signup_messages():
    assert validate_signup("A", "Alice", "secret") == "Username must be at least two characters"
    assert validate_signup("Al", "", "secret") == "A real name (or pseudonym) must be given"
    assert validate_signup("Al", "Alice", "ab") == "Please use a better password"


def test_validate_signup_reports_first_problem():
    assert validate_signup("", "", "") == "Username must be at least two characters"


def test_validate_signup_accepts_minimal_form():
    assert validate_signup("Al", "A", "abc") is None


def test_authenticate_unknown_user_still_checks_a_hash(session, monkeypatch):
    calls = []

    def counting_verify(plain_password, hashed_password):
        calls.append(hashed_password)
        return verify_password(plain_password, hashed_password)

    monkeypatch.setattr(auth, "verify_password", counting_verify)

    assert auth.authenticate_user(session, "nobody", "secret") is None
    assert len(calls) == 1
    assert calls[0].startswith("$2b$12$")
