"""JWT verification service."""

import time

from authlib.jose import JoseError, jwt
from fastapi import HTTPException
from loguru import logger

from src.library.core.models.principal import TokenClaims
from src.library.core.services.jwt.jwt_utils import (
    JwtPreview,
    create_token_claims,
    preview_jwt,
)
from src.library.runtime.config.config_data import JWTConfig
from src.library.runtime.context import get_config


class JwtVerificationService:
    """Verifies bearer tokens signed with the configured shared secret."""

    def __init__(self, jwt_config: JWTConfig | None = None):
        self._config = jwt_config or get_config().jwt

    async def verify_jwt(
        self,
        token: str,
        *,
        key: str | None = None,
        preview: JwtPreview | None = None,
    ) -> TokenClaims:
        cfg = self._config
        pv = preview or preview_jwt(token)

        if pv.alg not in cfg.allowed_algorithms:
            raise HTTPException(status_code=401, detail="Disallowed JWT algorithm")

        if not pv.iss:
            raise HTTPException(status_code=401, detail="Missing iss claim")

        verification_key = key or cfg.signing_secret
        if not verification_key:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        claims_options = {
            "iss": {"essential": True, "values": [cfg.issuer.rstrip("/")]},
            "aud": {"essential": True, "values": list(cfg.audiences)},
            "exp": {"essential": True},
            "sub": {"essential": True},
        }

        try:
            logger.debug(
                "Verifying JWT from issuer {} with expected audience {}",
                pv.iss,
                cfg.audiences,
            )
            claims = jwt.decode(token, verification_key, claims_options=claims_options)
            claims.validate(leeway=cfg.clock_skew)
        except (JoseError, ValueError) as exc:
            raise HTTPException(status_code=401, detail=f"JWT error: {exc}") from exc

        now = int(time.time())
        for k, check in (
            ("nbf", lambda v: now < int(v) - cfg.clock_skew),
            ("iat", lambda v: int(v) > now + cfg.clock_skew),
        ):
            v = claims.get(k)
            if v is not None and check(v):
                raise HTTPException(status_code=401, detail=f"Invalid {k} with skew")

        token_claims = create_token_claims(dict(claims), cfg.claims)
        if not token_claims.subject:
            raise HTTPException(status_code=401, detail="Missing sub claim")
        return token_claims
