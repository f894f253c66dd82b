import structlog
from passlib.context import CryptContext

from app.core.config import settings

logger = structlog.get_logger(__name__)


def _build_context() -> CryptContext:
    """bcrypt when the backend works, pbkdf2_sha256 otherwise."""
    rounds = settings.BCRYPT_ROUNDS
    try:
        if rounds:
            context = CryptContext(
                schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
            )
        else:
            context = CryptContext(schemes=["bcrypt"], deprecated="auto")
        context.hash("probe")
        return context
    except Exception as e:
        logger.warning(
            "bcrypt backend unavailable, falling back to pbkdf2_sha256", error=str(e)
        )
        return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


pwd_context = _build_context()


def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # Unrecognized or malformed hash
        return False
