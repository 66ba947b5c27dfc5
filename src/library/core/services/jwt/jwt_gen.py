import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from loguru import logger

from src.library.runtime.config.config_data import JWTConfig
from src.library.runtime.context import get_config

_REGISTERED_CLAIMS = frozenset({"iss", "sub", "aud", "exp", "iat", "nbf", "jti"})


class JwtGeneratorService:
    """Service for generating JWT tokens accepted by this API."""

    def __init__(self, jwt_config: JWTConfig | None = None):
        self._config = jwt_config or get_config().jwt

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        issuer: str | None = None,
        audience: str | list[str] | None = None,
        algorithm: str = "HS256",
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT.

        Args:
            subject: Subject (sub) claim, the user identifier
            claims: Additional claims; registered claims in here are ignored
            expires_in_seconds: Token lifetime (defaults to the configured TTL)
            issuer: Issuer (iss) claim (defaults to the configured issuer)
            audience: Audience (aud) claim (defaults to the configured audiences)
            algorithm: Signing algorithm, must be allowed by configuration
            secret: Signing secret (defaults to the configured secret)

        Raises:
            ValueError: If the secret is missing, the algorithm is not allowed,
                or encoding fails
        """
        cfg = self._config
        secret = secret or cfg.signing_secret
        if not secret:
            raise ValueError("JWT signing secret not configured")

        if algorithm not in cfg.allowed_algorithms:
            logger.debug(
                "Attempted to use disallowed algorithm {}, only {} are allowed",
                algorithm,
                cfg.allowed_algorithms,
            )
            raise ValueError(f"Algorithm {algorithm} not allowed")

        now = int(time.time())
        ttl = cfg.token_ttl_seconds if expires_in_seconds is None else expires_in_seconds
        payload: dict[str, Any] = {
            "iss": issuer or cfg.issuer,
            "sub": subject,
            "aud": audience or list(cfg.audiences),
            "exp": now + ttl,
            "iat": now,
            "nbf": now,
            "jti": generate_token(16),
        }
        if claims:
            payload.update(
                {k: v for k, v in claims.items() if k not in _REGISTERED_CLAIMS}
            )

        try:
            token = jwt.encode({"alg": algorithm, "typ": "JWT"}, payload, secret)
        except JoseError as e:
            raise ValueError(f"JWT encoding failed: {e}") from e

        return token.decode() if isinstance(token, bytes) else token

    def generate_access_token(
        self,
        user_id: str,
        roles: list[str] | None = None,
        expires_in_seconds: int | None = None,
        **extra_claims: Any,
    ) -> str:
        """Generate an access token carrying the user's roles.

        Example:
            token = generate_access_token(
                user_id="c47641ee-...",
                roles=["USER"],
                email="bruce.wayne@example.com",
                given_name="Bruce",
                family_name="Wayne",
            )
        """
        claims: dict[str, Any] = dict(extra_claims)
        if roles:
            claims[self._config.claims.roles] = list(roles)
        return self.generate_jwt(
            subject=user_id, claims=claims, expires_in_seconds=expires_in_seconds
        )
