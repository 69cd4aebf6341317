"""
Site activity proxy - FastAPI application

POST /fetch-site-activity with {"filters": {...}} fetches every page for the
filters and answers with the envelope built by the transformation layer.
Failures of the first page come back as {"error": ...} with an HTTP error
status; lost later pages come back as a 200 carrying summary.warning.
"""

from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..extract.models import SiteActivityQuery
from ..orchestration.pipeline import SiteActivityPipeline

logger = logging.getLogger(__name__)


class SiteActivityFilters(BaseModel):
    """
    Dashboard filters, accepted in the dashboard's camelCase form.
    """

    model_config = ConfigDict(populate_by_name=True)

    utm_source: str = Field(..., min_length=1, alias="utmSource")
    from_date: Optional[str] = Field(default=None, alias="fromDate")
    to_date: Optional[str] = Field(default=None, alias="toDate")
    site_type: str = Field(default="domestic", alias="siteType")
    include_details: bool = Field(default=True, alias="includeDetails")
    agent_email: Optional[str] = Field(default=None, alias="agentEmail")

    def to_query(self) -> SiteActivityQuery:
        return SiteActivityQuery(
            utm_source=self.utm_source,
            from_date=self.from_date,
            to_date=self.to_date,
            site_type=self.site_type,
            include_details=self.include_details,
            agent_email=self.agent_email,
        )


class SiteActivityRequest(BaseModel):
    filters: SiteActivityFilters


def create_app(pipeline: Optional[SiteActivityPipeline] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        pipeline: Pipeline serving requests; built from the environment on
            first request if omitted
    """
    pipeline = pipeline or SiteActivityPipeline()

    application = FastAPI(title="Site Activity Proxy", version="0.1.0")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @application.get("/health")
    def healthcheck() -> dict:
        return {"status": "ok"}

    # sync handler: FastAPI runs it in its threadpool, the fetch is blocking
    @application.post("/fetch-site-activity")
    def fetch_site_activity(request: SiteActivityRequest) -> JSONResponse:
        status_code, body = pipeline.handle_request(request.filters.to_query())
        return JSONResponse(status_code=status_code, content=body)

    return application
