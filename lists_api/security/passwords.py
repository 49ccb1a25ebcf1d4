"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification using bcrypt directly.
Passwords are never stored in plain text. bcrypt only accepts passwords of
at most 72 UTF-8 bytes; longer ones are rejected by the request schemas and
never match on verification.
"""

import bcrypt

from lists_api.models.user import Credential

# bcrypt 입력 한도 (bcrypt input limit, in UTF-8 bytes)
MAX_PASSWORD_BYTES: int = 72

# 존재하지 않는 사용자 검증 시 사용하는 더미 해시
# Compared against when the username is unknown, so both paths cost one bcrypt check
_DUMMY_HASH: bytes = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt())


def password_fits(password: str) -> bool:
    """bcrypt 한도 이내인지 확인 (True when the password is within the bcrypt limit)."""
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password with a fresh random salt.

    Raises:
        ValueError: 72바이트 초과 (Password longer than MAX_PASSWORD_BYTES)
    """
    if not password_fits(password):
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def make_credential(username: str, password: str) -> Credential:
    """사용자명과 평문 비밀번호로 Credential 값 객체를 만듭니다.

    Build a Credential value object, hashing the password.
    """
    return Credential(username=username, password_hash=hash_password(password))


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a password against a bcrypt hash in constant time. A missing hash
    or a password over the bcrypt limit still runs a comparison against a
    dummy hash and returns False.
    """
    if hashed_password is None or not password_fits(plain_password):
        bcrypt.checkpw(b"not-the-dummy-password", _DUMMY_HASH)
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
