from datetime import datetime, timezone
from typing import Tuple

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.config import settings
from content.services.content_by_concept_service import ContentByConceptService
from shared.wiring import get_content_by_concept_service

log = structlog.get_logger(__name__)

router = APIRouter(tags=["system"])

NEO4J_CHECK = {
    "id": "neo4j-check",
    "name": "Check connectivity to Neo4j",
    "severity": 1,
    "businessImpact": "Unable to respond to Public Content By Concept api requests",
    "technicalSummary": "Cannot connect to Neo4j. If this check fails, check that Neo4j instance is up and running.",
    "panicGuide": "https://dewey.ft.com/content-by-concept-api.html",
}


async def _neo4j_checker(svc: ContentByConceptService) -> Tuple[bool, str]:
    # Probed on every call; no cached health state.
    try:
        await svc.check_connectivity()
    except Exception as e:
        log.warning("neo4j connectivity check failed", error=str(e))
        return False, f"Error connecting to neo4j: {e}"
    return True, "Connectivity to neo4j is ok"


@router.get("/__health", summary="Health checks")
async def health(svc: ContentByConceptService = Depends(get_content_by_concept_service)):
    ok, output = await _neo4j_checker(svc)
    check = {
        **NEO4J_CHECK,
        "ok": ok,
        "checkOutput": output,
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
    }
    return {
        "schemaVersion": 1,
        "name": "Content-by-Concept Healthchecks",
        "description": "Checks for accessing neo4j",
        "checks": [check],
        "ok": ok,
    }


@router.get("/__gtg", summary="Good to go", response_class=PlainTextResponse)
async def good_to_go(svc: ContentByConceptService = Depends(get_content_by_concept_service)):
    ok, output = await _neo4j_checker(svc)
    if not ok:
        return PlainTextResponse(output, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return PlainTextResponse("OK")


@router.get("/__ping", response_class=PlainTextResponse, include_in_schema=False)
@router.get("/ping", response_class=PlainTextResponse, summary="Ping")
async def ping():
    return "pong"


@router.get("/__build-info", include_in_schema=False)
@router.get("/build-info", summary="Build info")
async def build_info():
    return JSONResponse(
        {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": settings.app_description,
            "env": settings.env,
        }
    )
