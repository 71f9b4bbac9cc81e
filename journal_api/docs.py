"""
Daily Journal API - OpenAPI Document Generation
=================================================

What:  Builds the OpenAPI 3.0 document from the declared routes and schemas.
How:   fastapi.openapi.utils.get_openapi walks app.routes (paths, parameters,
       response_model / responses annotations, Pydantic schemas). The result is
       cached on app.openapi_schema when the app is built, so /openapi.json,
       /api-docs (Swagger UI) and /redoc all serve the same static document.

The document only describes behavior; nothing here is consulted while a
request is being handled.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from journal_api.config import settings

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"

TAGS_METADATA = [
    {"name": "Entry", "description": "Create, read, update and delete journal entries."},
    {"name": "Health", "description": "Service health and database connectivity."},
]


def _is_null_schema(schema: Any) -> bool:
    return isinstance(schema, dict) and schema.get("type") == "null" and len(schema) == 1


def nullable_to_openapi_30(node: Any) -> Any:
    """
    Rewrite JSON Schema null unions into OpenAPI 3.0 `nullable` schemas.

    Pydantic v2 renders Optional[X] as {"anyOf": [X, {"type": "null"}]}, which
    only OpenAPI 3.1 accepts. In 3.0 the same thing is X plus "nullable": true;
    a $ref cannot carry siblings, so it is wrapped in allOf first.

    Example:
        {"anyOf": [{"type": "string"}, {"type": "null"}], "maxLength": 50}
        becomes {"type": "string", "maxLength": 50, "nullable": true}
    """
    if isinstance(node, list):
        return [nullable_to_openapi_30(item) for item in node]
    if not isinstance(node, dict):
        return node

    node = {key: nullable_to_openapi_30(value) for key, value in node.items()}
    variants = node.get("anyOf")
    if not isinstance(variants, list) or not any(_is_null_schema(v) for v in variants):
        return node

    others = [v for v in variants if not _is_null_schema(v)]
    rest = {key: value for key, value in node.items() if key != "anyOf"}
    if len(others) == 1 and "$ref" not in others[0]:
        merged = {**others[0], **rest}
    elif len(others) == 1:
        merged = {"allOf": others, **rest}
    else:
        merged = {"anyOf": others, **rest}
    merged["nullable"] = True
    return merged


def build_openapi(app: FastAPI) -> Dict[str, Any]:
    """Generate the OpenAPI 3.0 document for `app` without caching it."""
    document = get_openapi(
        title=app.title,
        version=app.version,
        openapi_version=OPENAPI_VERSION,
        description=app.description,
        routes=app.routes,
        tags=TAGS_METADATA,
        servers=[
            {
                "url": f"http://localhost:{settings.backend_port}",
                "description": "Local server",
            }
        ],
    )
    return nullable_to_openapi_30(document)


def install_openapi(app: FastAPI) -> Dict[str, Any]:
    """
    Generate the document once and make app.openapi() return it.

    Call after every router has been included.
    """
    schema = build_openapi(app)
    app.openapi_schema = schema

    def openapi() -> Dict[str, Any]:
        return app.openapi_schema

    app.openapi = openapi
    logger.debug("OpenAPI document generated with %d paths", len(schema.get("paths", {})))
    return schema
