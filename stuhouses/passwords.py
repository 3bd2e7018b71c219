from __future__ import annotations

from bcrypt import checkpw, gensalt, hashpw


# Matches the cost factor of hashes already stored by the API.
BCRYPT_ROUNDS = 10


def hash_password(raw_password: str) -> str:
    return hashpw(raw_password.encode("utf-8"), gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(raw_password: str, hashed_password: str) -> bool:
    return checkpw(raw_password.encode("utf-8"), hashed_password.encode("utf-8"))
