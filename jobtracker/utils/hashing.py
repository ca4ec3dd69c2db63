import bcrypt

# bcrypt only reads this many bytes of input and rejects longer passwords
MAX_PASSWORD_BYTES = 72


# Hash a plain-text password with a fresh bcrypt salt
def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


# Verify a plain password against a stored bcrypt hash
def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long password
        return False
