from __future__ import annotations


def test_hash_password_round_trip() -> None:
    from stuhouses.passwords import hash_password, verify_password

    hashed = hash_password("admin123")
    assert hashed != "admin123"
    assert hashed.startswith("$2")
    assert verify_password("admin123", hashed)
    assert not verify_password("admin124", hashed)


def test_hash_password_is_salted() -> None:
    from stuhouses.passwords import hash_password

    assert hash_password("user123") != hash_password("user123")
