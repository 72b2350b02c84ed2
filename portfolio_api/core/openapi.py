"""OpenAPI metadata and customization utilities.

Adds tag descriptions to the generated schema and marks the public read
endpoints so API consumers can tell them apart from the profile update.
Keeps documentation concerns out of the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA: list[dict[str, str]] = [
    {"name": "Health", "description": "Liveness and dependency checks."},
    {"name": "Profile", "description": "The portfolio owner's profile."},
    {
        "name": "Resume",
        "description": "Work experience, skills, education and certifications.",
    },
    {"name": "Projects", "description": "Showcased projects."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tag metadata.

    - Adds tags metadata if not present
    - Documents the 429 rate limit response on every operation
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for methods in schema.get("paths", {}).values():
            for method_obj in methods.values():
                if isinstance(method_obj, dict):
                    method_obj.setdefault("responses", {}).setdefault(
                        "429",
                        {"description": "Too many requests from this client"},
                    )

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
