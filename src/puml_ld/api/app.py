"""
FastAPI application exposing the PlantUML to JSON-LD conversion.

Provides:
- PUT /convert: PlantUML body + Context/Id headers -> JSON-LD document
- GET /shacl: SHACL shape lookup by diagram type
- GET /: static service description
- GET /health: liveness check
"""

import json
from datetime import datetime, timezone
from logging import getLogger
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from puml_ld.config import ServiceConfig
from puml_ld.core.pipeline import convert_puml
from puml_ld.exceptions.conversion import ConversionError
from puml_ld.exceptions.parsing import ParseError
from puml_ld.shapes.repository import ShapeRepository

logger = getLogger(__name__)

SERVICE_NAME = "puml-ld"
SERVICE_VERSION = "1.0.0"
JSONLD_MEDIA_TYPE = "application/ld+json"

REQUIRED_HEADERS = {
    "Context": "JSON-LD context URL or inline JSON",
    "Id": "Base IRI for generated resources",
}

SERVICE_DESCRIPTION = {
    "name": SERVICE_NAME,
    "version": SERVICE_VERSION,
    "description": "Converts PlantUML documents to JSON-LD format",
    "endpoints": {
        "shacl": {
            "method": "GET",
            "path": "/shacl",
            "description": "Retrieve SHACL shape definitions by diagram type",
            "parameters": {"name": "Diagram type (ERD, Sequence, Class, UseCase, etc.)"},
            "example": "/shacl?name=Class",
        },
        "convert": {
            "method": "PUT",
            "path": "/convert",
            "description": "Convert PlantUML document to JSON-LD",
            "headers": REQUIRED_HEADERS,
            "body": "PlantUML source code (text/plain)",
            "example": "PUT /convert with PlantUML in body",
        },
    },
}


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def parse_context_header(value: str):
    """A context header is either a dereferenceable URL, kept as a string, or inline JSON.

    Raises:
        json.JSONDecodeError: if the value is not a URL and not valid JSON
    """
    if value.startswith(("http://", "https://")):
        return value
    return json.loads(value)


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """Build the application for the given configuration (environment when None)"""
    config = config or ServiceConfig.from_env()
    shapes = ShapeRepository(config.shapes_dir)

    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)

    @app.get("/")
    def describe_service():
        return SERVICE_DESCRIPTION

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/shacl")
    def get_shacl(name: Optional[str] = None):
        if not name:
            return _error(400, "Missing required parameter: name")

        shape = shapes.get_shape(name)
        if shape is None:
            return _error(404, f"SHACL shape not found for diagram type: {name}")
        return PlainTextResponse(shape, media_type="text/turtle")

    @app.put("/convert")
    async def convert(request: Request):
        context_header = request.headers.get("Context")
        id_header = request.headers.get("Id")
        if not context_header or not id_header:
            return _error(400, "Missing required headers", required=REQUIRED_HEADERS)

        source = (await request.body()).decode("utf-8", errors="replace")
        if not source:
            return _error(400, "Request body is empty. PlantUML source required.")

        try:
            context = parse_context_header(context_header)
        except json.JSONDecodeError as e:
            return _error(400, f"Invalid Context header: {e}")

        try:
            document = convert_puml(source, context, id_header)
        except ParseError as e:
            logger.info(f"Rejected PlantUML source: {e}")
            return _error(422, f"PlantUML parsing failed: {e}")
        except ConversionError as e:
            logger.error(f"JSON-LD conversion failed: {e}")
            return _error(500, f"JSON-LD conversion failed: {e}")
        except Exception as e:
            logger.exception("Unexpected error during conversion")
            return _error(500, f"Internal server error: {e}")

        return Response(content=document.encode("utf-8"), media_type=JSONLD_MEDIA_TYPE)

    return app
