"""
Proxy API tests - FastAPI routes with a mocked pipeline
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from site_activity.api.proxy import create_app
from site_activity.extract.models import SiteActivityQuery
from site_activity.orchestration.pipeline import SiteActivityPipeline


@pytest.fixture()
def pipeline():
    pipeline = Mock(spec=SiteActivityPipeline)
    pipeline.handle_request.return_value = (
        200,
        {"code": 200, "status": "success", "data": {"summary": {"totalSites": 0}}},
    )
    return pipeline


@pytest.fixture()
def client(pipeline):
    return TestClient(create_app(pipeline=pipeline))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_filters_are_converted_to_query(client, pipeline):
    response = client.post(
        "/fetch-site-activity",
        json={
            "filters": {
                "utmSource": "PROJECTSOLAR",
                "fromDate": "2024-01-01",
                "toDate": "2024-01-31",
                "siteType": "commercial",
                "includeDetails": False,
            }
        },
    )

    assert response.status_code == 200
    pipeline.handle_request.assert_called_once_with(
        SiteActivityQuery(
            utm_source="PROJECTSOLAR",
            from_date="2024-01-01",
            to_date="2024-01-31",
            site_type="commercial",
            include_details=False,
        )
    )


def test_error_status_is_passed_through(client, pipeline):
    pipeline.handle_request.return_value = (504, {"error": "API request failed: HTTP 504"})

    response = client.post("/fetch-site-activity", json={"filters": {"utmSource": "X"}})

    assert response.status_code == 504
    assert response.json() == {"error": "API request failed: HTTP 504"}


def test_missing_source_is_rejected(client, pipeline):
    response = client.post("/fetch-site-activity", json={"filters": {}})

    assert response.status_code == 422
    pipeline.handle_request.assert_not_called()


def test_cors_preflight(client):
    response = client.options(
        "/fetch-site-activity",
        headers={
            "Origin": "https://dashboard.example.test",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
