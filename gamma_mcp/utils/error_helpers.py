from __future__ import annotations

_CREDENTIAL_TIP = " Tip: Check that GAMMA_API_KEY is set to a valid key for your Gamma workspace."

_AUTH_STATUS_CODES = frozenset({401, 403})


def augment_with_credential_tip(message: str, status_code: int | None = None) -> str:
    """Append a credential tip to auth failures (HTTP 401/403).

    Only the status code is consulted; the upstream body is never inspected.
    """
    if not message:
        return message
    if _CREDENTIAL_TIP.strip() in message:
        return message
    if status_code in _AUTH_STATUS_CODES:
        return message.rstrip() + _CREDENTIAL_TIP
    return message


__all__ = ["augment_with_credential_tip"]
