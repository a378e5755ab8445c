import bcrypt


def hash_password(password: str) -> str:
    """Hash bcrypt (sel inclus dans la chaîne retournée)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # hash corrompu / pas au format bcrypt
        return False
