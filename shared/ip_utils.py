"""
Client IP resolution for FastAPI requests.

Takes an explicit ``Request`` so the function is testable without a running
app.
"""

from __future__ import annotations

from fastapi import Request

# Checked in priority order; X-Forwarded-For may hold a chain, first hop wins
PROXY_IP_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
)


def get_client_ip(request: Request) -> str:
    """Return the visitor's IP, preferring proxy headers over the socket peer.

    Returns ``"Unknown"`` when neither is available.
    """
    for header in PROXY_IP_HEADERS:
        value = request.headers.get(header)
        if not value:
            continue
        client_ip = value.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host
    return "Unknown"
