"""Async GeoIP lookups around the synchronous geoip2 library.

geoip2 reads from local .mmdb files (GeoLite2-City for location, GeoLite2-ASN
for the network operator). Calls are wrapped in asyncio.to_thread() to avoid
blocking the event loop.

Every failure mode degrades to the defaults: "Unknown" country/city/ISP and
null region, postal code and coordinates. Private, loopback and malformed
addresses are never looked up.
"""

import asyncio
import ipaddress
from dataclasses import dataclass
from typing import Optional

import geoip2.database
import geoip2.errors
import maxminddb

from schemas.models.click import UNKNOWN
from shared.logging import get_logger

log = get_logger(__name__)

_LOOKUP_ERRORS = (
    geoip2.errors.AddressNotFoundError,
    ValueError,
    maxminddb.InvalidDatabaseError,
)


@dataclass(frozen=True)
class GeoLocation:
    country: str = UNKNOWN
    city: str = UNKNOWN
    region: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    isp: str = UNKNOWN


UNKNOWN_LOCATION = GeoLocation()


def is_public_ip(ip_address: Optional[str]) -> bool:
    if not ip_address:
        return False
    try:
        addr = ipaddress.ip_address(ip_address)
    except ValueError:
        return False
    return addr.is_global


class GeoIPService:
    def __init__(self, city_db_path: str, asn_db_path: str) -> None:
        self._city_db_path = city_db_path
        self._asn_db_path = asn_db_path
        self._readers: dict[str, Optional[geoip2.database.Reader]] = {}
        self._lock = asyncio.Lock()

    async def _get_reader(self, path: str) -> Optional[geoip2.database.Reader]:
        if path not in self._readers:
            async with self._lock:
                if path not in self._readers:
                    try:
                        self._readers[path] = await asyncio.to_thread(
                            geoip2.database.Reader, path
                        )
                    except (OSError, maxminddb.InvalidDatabaseError) as e:
                        log.warning(
                            "geoip_db_unavailable",
                            path=path,
                            error=str(e),
                            error_type=type(e).__name__,
                        )
                        self._readers[path] = None
        return self._readers[path]

    async def _get_isp(self, ip_address: str) -> str:
        reader = await self._get_reader(self._asn_db_path)
        if reader is None:
            return UNKNOWN
        try:
            result = await asyncio.to_thread(reader.asn, ip_address)
        except _LOOKUP_ERRORS:
            return UNKNOWN
        return result.autonomous_system_organization or UNKNOWN

    async def locate(self, ip_address: Optional[str]) -> GeoLocation:
        if not is_public_ip(ip_address):
            return UNKNOWN_LOCATION

        isp = await self._get_isp(ip_address)

        reader = await self._get_reader(self._city_db_path)
        if reader is None:
            return GeoLocation(isp=isp)
        try:
            result = await asyncio.to_thread(reader.city, ip_address)
        except _LOOKUP_ERRORS:
            return GeoLocation(isp=isp)

        region = result.subdivisions.most_specific.name
        return GeoLocation(
            country=result.country.name or UNKNOWN,
            city=result.city.name or UNKNOWN,
            region=region,
            state=region,
            postal_code=result.postal.code,
            latitude=result.location.latitude,
            longitude=result.location.longitude,
            isp=isp,
        )

    def close(self) -> None:
        for reader in self._readers.values():
            if reader is not None:
                reader.close()
        self._readers.clear()
