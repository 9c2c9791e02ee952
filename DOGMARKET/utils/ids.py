# file: DOGMARKET/utils/ids.py
import secrets
import string

# URL-safe alphabet, same as nanoid's default.
ID_ALPHABET = string.ascii_letters + string.digits + "_-"
ID_SIZE = 8


def generate_id(prefix: str = "id", size: int = ID_SIZE) -> str:
    """Generate an opaque id like `pV1StGXR8`. The prefix only marks the record kind."""
    return prefix + "".join(secrets.choice(ID_ALPHABET) for _ in range(size))
