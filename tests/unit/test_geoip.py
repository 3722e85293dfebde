"""Unit tests for infrastructure.geoip."""

from unittest.mock import MagicMock

import geoip2.errors
import pytest

from infrastructure.geoip import UNKNOWN_LOCATION, GeoIPService, is_public_ip

PUBLIC_IP = "81.0.0.1"


def _city_result():
    result = MagicMock()
    result.country.name = "Norway"
    result.city.name = "Oslo"
    result.subdivisions.most_specific.name = "Oslo County"
    result.postal.code = "0150"
    result.location.latitude = 59.91
    result.location.longitude = 10.75
    return result


def _service(city_reader=None, asn_reader=None) -> GeoIPService:
    svc = GeoIPService("city.mmdb", "asn.mmdb")
    svc._readers = {"city.mmdb": city_reader, "asn.mmdb": asn_reader}
    return svc


@pytest.mark.parametrize(
    "ip, expected",
    [
        ("81.0.0.1", True),
        ("10.0.0.1", False),
        ("127.0.0.1", False),
        ("192.168.1.5", False),
        ("::1", False),
        ("Unknown", False),
        ("", False),
        (None, False),
    ],
)
def test_is_public_ip(ip, expected):
    assert is_public_ip(ip) is expected


class TestGeoIPService:
    async def test_missing_databases_give_defaults(self):
        svc = GeoIPService("nonexistent.mmdb", "nonexistent-asn.mmdb")
        assert await svc.locate(PUBLIC_IP) == UNKNOWN_LOCATION

    async def test_private_ip_skips_lookup(self):
        city = MagicMock()
        svc = _service(city_reader=city)
        assert await svc.locate("192.168.1.5") == UNKNOWN_LOCATION
        city.city.assert_not_called()

    async def test_full_lookup(self):
        city = MagicMock()
        city.city.return_value = _city_result()
        asn = MagicMock()
        asn.asn.return_value.autonomous_system_organization = "Telenor"

        location = await _service(city, asn).locate(PUBLIC_IP)

        assert location.country == "Norway"
        assert location.city == "Oslo"
        assert location.region == "Oslo County"
        assert location.state == "Oslo County"
        assert location.postal_code == "0150"
        assert location.latitude == pytest.approx(59.91)
        assert location.isp == "Telenor"

    async def test_address_not_found(self):
        city = MagicMock()
        city.city.side_effect = geoip2.errors.AddressNotFoundError("not found")
        asn = MagicMock()
        asn.asn.side_effect = geoip2.errors.AddressNotFoundError("not found")

        assert await _service(city, asn).locate(PUBLIC_IP) == UNKNOWN_LOCATION

    async def test_missing_names_fall_back(self):
        result = _city_result()
        result.country.name = None
        result.city.name = None
        city = MagicMock()
        city.city.return_value = result

        location = await _service(city, None).locate(PUBLIC_IP)

        assert location.country == "Unknown"
        assert location.city == "Unknown"
        assert location.isp == "Unknown"

    def test_close_releases_readers(self):
        city = MagicMock()
        svc = _service(city, None)
        svc.close()
        city.close.assert_called_once()
        assert svc._readers == {}

    async def test_reader_opened_once(self, mocker):
        reader_cls = mocker.patch("infrastructure.geoip.geoip2.database.Reader")
        reader_cls.return_value.city.return_value = _city_result()
        reader_cls.return_value.asn.return_value.autonomous_system_organization = "AS1"
        svc = GeoIPService("city.mmdb", "asn.mmdb")

        await svc.locate(PUBLIC_IP)
        await svc.locate(PUBLIC_IP)

        assert reader_cls.call_count == 2  # one per database
