"""Access/refresh token verification with silent access-token renewal.

`TokenVerifier.verify` is a pure decision over the two session cookies and a
required capability. When the access token has expired but the refresh token
is still valid and satisfies the capability, the result carries a `Renewal`
describing the new access cookie; writing it to a response is left to the
caller.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from pocketbook.config import Settings
from pocketbook.models.enums import Role
from pocketbook.services.auth import create_token

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"
REQUIRED_CLAIMS = ("username", "email", "role")
RENEWED_CLAIMS = ("username", "email", "id", "role")
RENEWAL_MESSAGE = (
    "Access token has been refreshed. "
    "Remember to copy the new one in the headers of subsequent calls"
)


class Capability(ABC):
    """Authorization check required by a route."""

    denied_cause = "Unauthorized"
    expired_cause = "Unauthorized"

    @abstractmethod
    def allows(self, claims: Mapping[str, Any]) -> bool:
        """Check `claims` against this capability."""


@dataclass(frozen=True)
class SimpleAuth(Capability):
    """Any caller passes."""

    def allows(self, claims: Mapping[str, Any]) -> bool:
        return True


@dataclass(frozen=True)
class UserAuth(Capability):
    """Caller must be the named user."""

    username: str
    denied_cause = "User: Mismatched users"
    expired_cause = "Token Expired: Mismatched users"

    def allows(self, claims: Mapping[str, Any]) -> bool:
        return claims.get("username") == self.username


@dataclass(frozen=True)
class AdminAuth(Capability):
    """Caller must hold the Admin role."""

    denied_cause = "Admin: Mismatched role"
    expired_cause = "Admin: Access Token Expired and Mismatched role"

    def allows(self, claims: Mapping[str, Any]) -> bool:
        return claims.get("role") == Role.ADMIN.value


@dataclass(frozen=True)
class GroupAuth(Capability):
    """Caller's email must be one of `emails`."""

    emails: frozenset[str] = field(default_factory=frozenset)
    denied_cause = "Group: user not in group"
    expired_cause = "Group: Access Token Expired and user not in group"

    def __init__(self, emails: Iterable[str]):
        object.__setattr__(self, "emails", frozenset(emails))

    def allows(self, claims: Mapping[str, Any]) -> bool:
        return claims.get("email") in self.emails


@dataclass(frozen=True)
class CookieSpec:
    """A Set-Cookie instruction."""

    key: str
    value: str
    max_age: int  # seconds
    path: str
    samesite: str
    secure: bool
    httponly: bool = True
    domain: str | None = None

    def apply(self, response) -> None:
        """Write the cookie onto a Starlette/FastAPI response."""
        response.set_cookie(
            key=self.key,
            value=self.value,
            max_age=self.max_age,
            path=self.path,
            domain=self.domain,
            secure=self.secure,
            httponly=self.httponly,
            samesite=self.samesite,
        )


@dataclass(frozen=True)
class Renewal:
    """A freshly minted access token and how to deliver it."""

    token: str
    cookie: CookieSpec
    message: str = RENEWAL_MESSAGE


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a verification."""

    authorized: bool
    cause: str
    claims: Mapping[str, Any] | None = None
    renewal: Renewal | None = None

    @classmethod
    def granted(
        cls, claims: Mapping[str, Any] | None = None, renewal: Renewal | None = None
    ) -> "AuthResult":
        return cls(True, "Authorized", claims, renewal)

    @classmethod
    def denied(cls, cause: str, claims: Mapping[str, Any] | None = None) -> "AuthResult":
        logger.debug(f"Authorization denied: {cause}")
        return cls(False, cause, claims)

    @property
    def is_admin(self) -> bool:
        return bool(self.claims) and self.claims.get("role") == Role.ADMIN.value


def _has_required_claims(claims: Mapping[str, Any]) -> bool:
    return all(claims.get(name) for name in REQUIRED_CLAIMS)


class TokenVerifier:
    """Checks session cookies against a capability."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(hours=1),
        cookie_path: str = "/api",
        cookie_samesite: str = "none",
        cookie_secure: bool = True,
        cookie_domain: str | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.cookie_path = cookie_path
        self.cookie_samesite = cookie_samesite
        self.cookie_secure = cookie_secure
        self.cookie_domain = cookie_domain

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenVerifier":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            access_ttl=timedelta(minutes=settings.access_token_expiration_minutes),
            cookie_path=settings.cookie_path,
            cookie_samesite=settings.cookie_samesite,
            cookie_secure=settings.cookie_secure,
            cookie_domain=settings.cookie_domain,
        )

    def decode(self, token: str) -> dict[str, Any]:
        """Verify the signature and expiry of `token` and return its claims."""
        return jwt.decode(token, self.secret, algorithms=[self.algorithm])

    def verify(self, cookies: Mapping[str, str], capability: Capability) -> AuthResult:
        """Decide whether the session cookies satisfy `capability`."""
        if isinstance(capability, SimpleAuth):
            return AuthResult.granted()

        access_token = cookies.get(ACCESS_COOKIE)
        refresh_token = cookies.get(REFRESH_COOKIE)
        if not access_token or not refresh_token:
            return AuthResult.denied("Unauthorized")

        try:
            access_claims = self.decode(access_token)
        except ExpiredSignatureError:
            return self._verify_with_refresh_only(refresh_token, capability)
        except JWTError as e:
            return AuthResult.denied(type(e).__name__)

        try:
            refresh_claims = self.decode(refresh_token)
        except ExpiredSignatureError:
            return AuthResult.denied("Perform login again")
        except JWTError as e:
            return AuthResult.denied(type(e).__name__)

        if not _has_required_claims(access_claims) or not _has_required_claims(refresh_claims):
            return AuthResult.denied("Token is missing information")
        if any(access_claims[name] != refresh_claims[name] for name in REQUIRED_CLAIMS):
            return AuthResult.denied("Mismatched users")
        if not capability.allows(access_claims):
            return AuthResult.denied(capability.denied_cause, access_claims)
        return AuthResult.granted(access_claims)

    def _verify_with_refresh_only(self, refresh_token: str, capability: Capability) -> AuthResult:
        try:
            claims = self.decode(refresh_token)
        except ExpiredSignatureError:
            return AuthResult.denied("Perform login again")
        except JWTError as e:
            return AuthResult.denied(type(e).__name__)

        if not _has_required_claims(claims):
            return AuthResult.denied("Token is missing information")
        if not capability.allows(claims):
            return AuthResult.denied(capability.expired_cause, claims)

        logger.info(f"Access token expired, renewed for '{claims['username']}'")
        return AuthResult.granted(claims, self._renew(claims))

    def _renew(self, claims: Mapping[str, Any]) -> Renewal:
        new_claims = {name: claims[name] for name in RENEWED_CLAIMS if name in claims}
        token = create_token(new_claims, self.access_ttl, self.secret, self.algorithm)
        cookie = CookieSpec(
            key=ACCESS_COOKIE,
            value=token,
            max_age=int(self.access_ttl.total_seconds()),
            path=self.cookie_path,
            samesite=self.cookie_samesite,
            secure=self.cookie_secure,
            domain=self.cookie_domain,
        )
        return Renewal(token=token, cookie=cookie)
