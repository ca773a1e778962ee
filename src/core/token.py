"""Decodificación del token de autenticación.

El token tiene forma `header.payload.signature`. Solo se usa el payload
para mostrar el usuario: no se verifica la firma. La autenticación real
la hace el registry al aceptar (o rechazar) el Bearer token.
"""

from __future__ import annotations

import base64
import binascii
import json

from pydantic import ValidationError

from core.domain.models import TokenPayload
from core.errors import MissingTokenError, TokenDecodeError, UsernameExtractionError


def require_token(token: str | None) -> str:
    """Valida que se haya pasado un token no vacío."""

    if token is None or not token.strip():
        raise MissingTokenError(
            "The authentication token must be passed as the first argument"
        )
    return token.strip()


_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


def _pad_base64(segment: str) -> str:
    return segment.translate(_URLSAFE_TO_STANDARD) + "=" * (-len(segment) % 4)


def decode_token_payload(token: str) -> TokenPayload:
    """Decodifica el segmento central del token a un `TokenPayload`.

    Reglas:
    - El texto decodificado debe empezar por `{` y terminar en `}`.
    - Se aceptan los alfabetos base64 estándar y URL-safe.
    """

    segments = token.split(".")
    if len(segments) < 2 or not segments[1].strip():
        raise TokenDecodeError("Unable to decode the authentication token")

    try:
        raw = base64.b64decode(_pad_base64(segments[1].strip()))
        text = raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise TokenDecodeError("Unable to decode the authentication token") from exc

    if not (text.startswith("{") and text.endswith("}")):
        raise TokenDecodeError("Unable to decode the authentication token")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TokenDecodeError("Unable to decode the authentication token") from exc

    try:
        return TokenPayload.model_validate(data)
    except ValidationError as exc:
        raise UsernameExtractionError(
            "Unable to extract the username from the authentication token"
        ) from exc


def extract_username(token: str) -> str:
    """Devuelve el `name` del payload o falla si no existe o está vacío."""

    payload = decode_token_payload(token)
    username = (payload.name or "").strip()
    if not username:
        raise UsernameExtractionError(
            "Unable to extract the username from the authentication token"
        )
    return username
