"""
Password hashing helpers.

Passwords are hashed with bcrypt (salted, iterated). bcrypt is CPU bound,
so the async variants push the work onto the thread pool instead of
blocking the event loop.

bcrypt only looks at the first 72 bytes of a password; longer passwords are
cut to that length explicitly so hashing and verification always agree.
"""

import bcrypt
from fastapi.concurrency import run_in_threadpool

BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str, rounds: int = 10) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    Returns False for malformed hashes instead of raising.
    """
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


async def hash_password_async(password: str, rounds: int = 10) -> str:
    return await run_in_threadpool(get_password_hash, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, password, password_hash)
