import base64
import json
from dataclasses import dataclass
from typing import Any, Final

from fastapi import HTTPException

from src.library.core.models.principal import TokenClaims
from src.library.runtime.config.config_data import JWTClaimsConfig

# ---------------- tunables ----------------
MAX_JWT_CHARS: Final = 4096
MAX_SEGMENT_CHARS: Final = 4096
MAX_HEADER_BYTES: Final = 8 * 1024
MAX_PAYLOAD_BYTES: Final = 64 * 1024
_ALLOWED: Final = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_."
)  # no '='


def _prefilter_compact_jwt(token: str) -> tuple[str, str, str]:
    if not token or len(token) > MAX_JWT_CHARS:
        raise HTTPException(status_code=401, detail="Invalid JWT size")
    if not set(token) <= _ALLOWED:
        raise HTTPException(status_code=401, detail="Invalid JWT characters")
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise HTTPException(status_code=401, detail="Invalid JWT format")
    h, p, s = parts
    if max(len(h), len(p), len(s)) > MAX_SEGMENT_CHARS:
        raise HTTPException(status_code=401, detail="Invalid JWT segment size")
    return h, p, s


def _b64url_decode_unpadded(seg: str, what: str, max_bytes: int) -> bytes:
    pad = (-len(seg)) % 4
    try:
        raw = base64.urlsafe_b64decode((seg + "=" * pad).encode("ascii"))
    except ValueError as e:
        raise HTTPException(
            status_code=401, detail=f"Invalid base64url in {what}"
        ) from e
    if len(raw) > max_bytes:
        raise HTTPException(status_code=401, detail=f"{what} too large")
    return raw


def _decode_json_object(raw: bytes, what: str) -> dict[str, Any]:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Non-UTF8 {what}") from e
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Invalid JSON in {what}") from e
    if not isinstance(obj, dict):
        raise HTTPException(status_code=401, detail=f"{what} must be a JSON object")
    return obj


@dataclass(frozen=True)
class JwtPreview:
    header: dict[str, Any]
    claims: dict[str, Any]
    alg: str | None
    iss: str | None


def preview_jwt(token: str) -> JwtPreview:
    """Split and decode header+payload exactly once, without verification."""
    h_seg, p_seg, _ = _prefilter_compact_jwt(token)
    header = _decode_json_object(
        _b64url_decode_unpadded(h_seg, "JWT header", MAX_HEADER_BYTES), "JWT header"
    )
    claims = _decode_json_object(
        _b64url_decode_unpadded(p_seg, "JWT payload", MAX_PAYLOAD_BYTES), "JWT payload"
    )
    iss = claims.get("iss")
    return JwtPreview(
        header=header,
        claims=claims,
        alg=header.get("alg"),
        iss=iss.rstrip("/") if isinstance(iss, str) and iss else None,
    )


def extract_roles(claims: dict[str, Any], role_claim: str = "roles") -> list[str]:
    """Extract raw role values from JWT claims.

    Reads the configured role claim (list or space-separated string) and
    Keycloak-style ``realm_access.roles``, preserving first-seen order.
    """
    roles: list[str] = []

    def add(values) -> None:
        for value in values:
            if value not in roles:
                roles.append(value)

    value = claims.get(role_claim)
    if isinstance(value, str):
        add(value.split())
    elif isinstance(value, (list, tuple)):
        add(str(v) for v in value)

    realm_access = claims.get("realm_access")
    if isinstance(realm_access, dict) and isinstance(realm_access.get("roles"), list):
        add(str(v) for v in realm_access["roles"])

    return roles


def create_token_claims(
    claims: dict[str, Any], claims_config: JWTClaimsConfig
) -> TokenClaims:
    """Create TokenClaims from verified JWT claims."""
    audience = claims.get("aud") or []
    return TokenClaims(
        subject=str(claims.get(claims_config.user_id) or ""),
        issuer=claims.get("iss"),
        audience=[audience] if isinstance(audience, str) else list(audience),
        roles=extract_roles(claims, claims_config.roles),
        email=claims.get(claims_config.email),
        given_name=claims.get(claims_config.given_name),
        family_name=claims.get(claims_config.family_name),
        expires_at=claims.get("exp"),
        all_claims=dict(claims),
    )
