"""Bearer token verification."""

from __future__ import annotations

import datetime
import typing as t

import jwt
import pydantic as p

from brainburst.model import Actor, UserID, UserRole


class TokenData(t.NamedTuple):
    """Decoded token data."""

    user_id: UserID
    role: UserRole
    expires_at: datetime.datetime
    issued_at: datetime.datetime | None

    @property
    def actor(self) -> Actor:
        return Actor(user_id=self.user_id, role=self.role)


class JWTManager(object):
    """Validates HS256 tokens carrying ``sub`` (user id) and ``role`` claims.

    Tokens are minted by the account service; this service only verifies them.
    """

    _secret_key: p.Secret[str]
    _algorithm: str
    _leeway: datetime.timedelta

    def __init__(self, secret_key: p.Secret[str] | None, algorithm: str = "HS256", leeway_seconds: int = 0) -> None:
        if secret_key is None:
            raise ValueError("auth.jwt is missing from secrets.yaml")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._leeway = datetime.timedelta(seconds=leeway_seconds)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def decode_token(self, token: str) -> TokenData | None:
        """Decode and validate a token.

        Returns:
            TokenData if valid, None if invalid, expired or carrying claims
            this service does not understand
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key.get_secret_value(),
                algorithms=[self._algorithm],
                leeway=self._leeway,
                options={"require": ["sub", "role", "exp"]},
            )
            iat = payload.get("iat")
            return TokenData(
                user_id=UserID(payload["sub"]),
                role=UserRole(payload["role"]),
                expires_at=datetime.datetime.fromtimestamp(payload["exp"], tz=datetime.UTC),
                issued_at=datetime.datetime.fromtimestamp(iat, tz=datetime.UTC) if iat is not None else None,
            )
        except jwt.InvalidTokenError:
            return None
        except ValueError:
            # malformed user id or unknown role
            return None
