import hashlib
import hmac
import secrets
import string
import time


ALPHABET = string.ascii_letters + string.digits  # A-Z a-z 0-9


def hash_password(password: str) -> str:
    """SHA-256 of the UTF-8 password, lowercase hex."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)


def new_team_id(suffix_length: int = 6) -> str:
    # team-<unix ms>-<random>, как в старой версии (team-${Date.now()}) + суффикс
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(suffix_length))
    return f"team-{millis}-{suffix}"
