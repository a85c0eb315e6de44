import secrets
import string

# URL-safe alphabet, same set as nanoid's default
SHORT_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_short_id(length: int = 5) -> str:
    return ''.join(secrets.choice(SHORT_ID_ALPHABET) for _ in range(length))
