import re

from conehub.core.security import hash_password, new_team_id, verify_password


def test_hash_is_sha256_hex():
    # sha256("abcd")
    assert hash_password("abcd") == (
        "88d4266fd4e6338d13b845fcf289579d209c897823b9217da3e161936f031589"
    )


def test_hash_is_deterministic():
    assert hash_password("alpha123") == hash_password("alpha123")
    assert hash_password("alpha123") != hash_password("alpha124")


def test_hash_never_equals_plaintext():
    for password in ("a", "abcd", "0" * 64, "пароль"):
        assert hash_password(password) != password


def test_verify_password():
    digest = hash_password("bravo123")
    assert verify_password("bravo123", digest)
    assert not verify_password("bravo12", digest)


def test_new_team_id_format_and_uniqueness():
    ids = {new_team_id() for _ in range(200)}
    assert len(ids) == 200
    for team_id in ids:
        assert re.fullmatch(r"team-\d{13}-[A-Za-z0-9]{6}", team_id)
