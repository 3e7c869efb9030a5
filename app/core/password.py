"""Argon2 password hashing for profiles and admins (pwdlib)."""

from pwdlib import PasswordHash

password_hash = PasswordHash.recommended()

# Verified against when the account is unknown or has no password, so every failed
# login costs one hash and timing does not reveal which e-mails exist
DUMMY_HASH = password_hash.hash("not-a-real-password")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return password_hash.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a sign-up or admin password for storage.

    Only the hash is ever persisted; registrations never keep the plaintext.
    """
    return password_hash.hash(password)
