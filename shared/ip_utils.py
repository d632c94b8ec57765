"""
Client IP resolution for FastAPI requests.

The resolved address is forwarded to the captcha provider as ``remoteip``.
Proxy headers are only honoured when the relay runs behind a trusted proxy;
otherwise any client could claim an arbitrary address.
"""

from __future__ import annotations

from fastapi import Request

_PROXY_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
)


def get_client_ip(request: Request, *, trust_proxy_headers: bool = True) -> str:
    """Extract the submitter's IP from a FastAPI ``Request``.

    With ``trust_proxy_headers`` the proxy headers are checked in priority
    order (Cloudflare, Akamai, the first hop of ``X-Forwarded-For``, nginx)
    before falling back to the direct connection address.

    Returns:
        The resolved client IP string, or ``""`` if none can be found.
    """
    if trust_proxy_headers:
        for header in _PROXY_HEADERS:
            ip_value: str | None = request.headers.get(header)
            if ip_value:
                client_ip = ip_value.split(",")[0].strip()
                if client_ip:
                    return client_ip

    return request.client.host if request.client else ""
