"""Integration tests for the link analytics endpoints."""

from datetime import datetime, timedelta, timezone

from bson import ObjectId


class TestAuth:
    def test_missing_token(self, client):
        resp = client.get(f"/api/links/{ObjectId()}/analytics")
        assert resp.status_code == 401
        assert resp.json() == {"error": "Authentication required", "code": "authentication_error"}

    def test_bad_token(self, client):
        resp = client.get(
            "/api/links/analytics/launch",
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == "authentication_error"


class TestLinkAnalyticsById:
    def test_not_found(self, client, auth_header, link_repo, click_repo):
        link_repo.find_owned_by_id.return_value = None
        resp = client.get(f"/api/links/{ObjectId()}/analytics", headers=auth_header)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Link not found", "code": "not_found"}
        click_repo.find_for_link.assert_not_awaited()

    def test_ownership_is_scoped_to_token_subject(
        self, client, auth_header, owner_id, link_repo, click_repo, make_link
    ):
        link = make_link()
        link_repo.find_owned_by_id.return_value = link
        click_repo.find_for_link.return_value = []

        client.get(f"/api/links/{link.id}/analytics", headers=auth_header)

        link_repo.find_owned_by_id.assert_awaited_once_with(str(link.id), owner_id)

    def test_camel_case_payload(
        self, client, auth_header, link_repo, click_repo, make_link, make_click
    ):
        link = make_link(clicks=3)
        day = datetime(2024, 1, 15, 8, tzinfo=timezone.utc)
        clicks = [
            make_click(day + timedelta(hours=2), country="Norway", city="Oslo",
                       browser="Chrome", device="Desktop",
                       referrer="https://www.google.com/search?q=x"),
            make_click(day + timedelta(hours=1), country="Norway", city="Oslo",
                       browser="Chrome", device="Desktop"),
            make_click(day, country="Sweden", city="Stockholm",
                       browser="Firefox", device="Mobile", utm_source="newsletter"),
        ]
        link_repo.find_owned_by_id.return_value = link
        click_repo.find_for_link.return_value = clicks

        resp = client.get(f"/api/links/{link.id}/analytics", headers=auth_header)

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        summary = body["data"]["link"]
        assert summary["_id"] == str(link.id)
        assert summary["destinationUrl"] == "https://example.com/launch"
        assert summary["isActive"] is True
        assert summary["clicks"] == 3

        analytics = body["data"]["analytics"]
        assert analytics["totalClicks"] == 3
        assert analytics["clicksByBrowser"] == {"Chrome": 2, "Firefox": 1}
        assert analytics["clicksByDevice"] == {"Desktop": 2, "Mobile": 1}
        assert analytics["clicksByReferrer"] == {"www.google.com": 1, "Direct": 2}
        assert analytics["clicksByUTMSource"] == {"newsletter": 1}
        assert analytics["clicksByDayOfWeek"] == {"Monday": 3}
        assert analytics["topCountries"] == [
            {"name": "Norway", "count": 2},
            {"name": "Sweden", "count": 1},
        ]
        assert analytics["topCities"][0] == {"name": "Oslo", "count": 2}
        assert len(analytics["clicksOverTime"]) == 24
        assert analytics["clicksOverTime"][8] == {
            "date": "2024-01-15", "hour": 8, "count": 1, "label": "08:00",
        }
        assert analytics["timeBucketInfo"]["mode"] == "hourly"

        recent = analytics["recentClicks"]
        assert [r["id"] for r in recent] == [str(c.id) for c in clicks]
        assert recent[0]["screenResolution"] == "Unknown"
        assert recent[0]["hourOfDay"] == 10

    def test_daily_series(self, client, auth_header, link_repo, click_repo, make_link, make_click):
        link_repo.find_owned_by_id.return_value = make_link()
        click_repo.find_for_link.return_value = [
            make_click(datetime(2024, 1, 20, 9, tzinfo=timezone.utc)),
            make_click(datetime(2024, 1, 15, 9, tzinfo=timezone.utc)),
            make_click(datetime(2024, 1, 15, 18, tzinfo=timezone.utc)),
        ]

        resp = client.get(f"/api/links/{ObjectId()}/analytics", headers=auth_header)

        analytics = resp.json()["data"]["analytics"]
        assert analytics["clicksOverTime"] == [
            {"date": "2024-01-15", "count": 2},
            {"date": "2024-01-20", "count": 1},
        ]
        assert analytics["timeBucketInfo"]["mode"] == "daily"


class TestLinkAnalyticsBySlug:
    def test_by_slug(self, client, auth_header, owner_id, link_repo, click_repo, make_link):
        link = make_link(slug="promo")
        link_repo.find_owned_by_slug.return_value = link
        click_repo.find_for_link.return_value = []

        resp = client.get("/api/links/analytics/promo", headers=auth_header)

        assert resp.status_code == 200
        analytics = resp.json()["data"]["analytics"]
        assert analytics["totalClicks"] == 0
        assert analytics["clicksOverTime"] == []
        assert analytics["recentClicks"] == []
        link_repo.find_owned_by_slug.assert_awaited_once_with("promo", owner_id)

    def test_unknown_slug(self, client, auth_header, link_repo):
        link_repo.find_owned_by_slug.return_value = None
        resp = client.get("/api/links/analytics/nope", headers=auth_header)
        assert resp.status_code == 404
