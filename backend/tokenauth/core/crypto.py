import base64
import os

from cryptography.hazmat.primitives import hashes, hmac

from .settings import settings

TOKEN_BYTES = 16  # 128 bits

def generate_token_secret() -> str:
    """
    Generates a random 128-bit bearer secret, base64-encoded.
    Uniqueness is not checked here; the store rejects collisions.
    """
    return base64.b64encode(os.urandom(TOKEN_BYTES)).decode("utf-8")

def hash_token_secret(secret: str, key: str | None = None) -> str:
    """
    Returns the HMAC-SHA256 hexdigest of a bearer secret.
    Only this digest is persisted, so a leaked table cannot be replayed.
    """
    key_bytes = (key if key is not None else settings.TOKEN_HASH_KEY).encode("utf-8")
    h = hmac.HMAC(key_bytes, hashes.SHA256())
    h.update(secret.encode("utf-8"))
    return h.finalize().hex()
