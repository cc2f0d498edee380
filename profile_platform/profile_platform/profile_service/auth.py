from passlib.context import CryptContext
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import jwt

BEARER_PREFIX = "Bearer "

NO_TOKEN_MESSAGE = "Unauthorized, no token"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(identity, secret: str, algorithm: str = "HS256", expires_minutes: int = 60) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": str(identity),
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of checking a bearer credential.

    Either ``identity`` is set and ``claims`` holds the decoded payload, or
    ``reason`` carries the message returned to the client with the 401.
    """
    identity: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)
    reason: Optional[str] = None

    @property
    def admitted(self) -> bool:
        return self.identity is not None

    @classmethod
    def success(cls, identity: str, claims: Dict[str, Any]) -> "VerificationResult":
        return cls(identity=identity, claims=claims)

    @classmethod
    def failure(cls, reason: str) -> "VerificationResult":
        return cls(reason=reason)


class TokenAuthenticator:
    """
    Verifies bearer tokens against a shared secret.

    Holds only immutable configuration, so a single instance is shared by
    all requests.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", leeway: int = 0):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._leeway = leeway

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def __repr__(self) -> str:
        return f"TokenAuthenticator(algorithm={self._algorithm!r}, leeway={self._leeway})"

    def issue(self, identity, expires_minutes: int = 60) -> str:
        return create_access_token(identity, self._secret, self._algorithm, expires_minutes)

    def verify_token(self, token: str) -> VerificationResult:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                leeway=self._leeway,
                options={"require": ["exp", "id"]},
            )
        except jwt.InvalidTokenError:
            return VerificationResult.failure(INVALID_TOKEN_MESSAGE)

        identity = payload.get("id")
        # bool is an int subclass but never a valid identity
        if isinstance(identity, bool) or not isinstance(identity, (str, int)) or identity == "":
            return VerificationResult.failure(INVALID_TOKEN_MESSAGE)
        return VerificationResult.success(str(identity), payload)

    def authenticate(self, authorization: Optional[str]) -> VerificationResult:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return VerificationResult.failure(NO_TOKEN_MESSAGE)

        _, _, token = authorization.partition(" ")
        return self.verify_token(token)
