"""
User-Agent classification (framework-agnostic).

Browser and OS families come from ``ua-parser``. The device class
(Desktop / Mobile / Tablet / Unknown) is not something ua-parser reports, so
it is derived from UA keywords.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from ua_parser import parse

from schemas.models.click import UNKNOWN, DeviceType

_MOBILE_RE = re.compile(
    r"mobile|android|iphone|ipod|blackberry|opera mini|opera mobi|skyfire|maemo|"
    r"windows phone|palm|iemobile|symbian|fennec",
    re.IGNORECASE,
)
_TABLET_RE = re.compile(
    r"tablet|ipad|playbook|silk|android(?!.*mobile)", re.IGNORECASE
)
_DESKTOP_RE = re.compile(
    r"windows|macintosh|linux|cros|freebsd|openbsd", re.IGNORECASE
)


@dataclass(frozen=True)
class ClientAgent:
    device: DeviceType
    browser: str
    os: str


def classify_device(user_agent: Optional[str]) -> DeviceType:
    if not user_agent:
        return DeviceType.UNKNOWN
    # iPads and Android tablets don't always say "mobile"
    if _TABLET_RE.search(user_agent):
        return DeviceType.TABLET
    if _MOBILE_RE.search(user_agent):
        return DeviceType.MOBILE
    if _DESKTOP_RE.search(user_agent):
        return DeviceType.DESKTOP
    return DeviceType.UNKNOWN


def _family(component) -> str:
    family = getattr(component, "family", None)
    if not family or family == "Other":
        return UNKNOWN
    return family


@lru_cache(maxsize=1024)
def classify_user_agent(user_agent: Optional[str]) -> ClientAgent:
    """Classify a raw ``User-Agent`` header into device, browser and OS."""
    if not user_agent:
        return ClientAgent(device=DeviceType.UNKNOWN, browser=UNKNOWN, os=UNKNOWN)

    result = parse(user_agent)
    return ClientAgent(
        device=classify_device(user_agent),
        browser=_family(result.user_agent) if result else UNKNOWN,
        os=_family(result.os) if result else UNKNOWN,
    )
