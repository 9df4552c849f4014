import json
import os

from src.api.main import app

# Get the OpenAPI schema (note: all REST routes are under /api/v1)
openapi_schema = app.openapi()

# Document the shared error envelope returned by every exception handler
components = openapi_schema.setdefault("components", {}).setdefault("schemas", {})
if "ErrorResponse" not in components:
    from src.schemas.common import ErrorResponse

    error_schema = ErrorResponse.model_json_schema(ref_template="#/components/schemas/{model}")
    for name, definition in error_schema.pop("$defs", {}).items():
        components.setdefault(name, definition)
    components["ErrorResponse"] = error_schema

# Describe the on-disk layout for client tooling
openapi_schema["x-storage"] = {
    "format": "xlsx",
    "layout": "one workbook per table in DATA_DIR, header row followed by one row per record",
    "reports_dir": "REPORTS_DIR (default DATA_DIR/reports)",
}

# Write to file
output_dir = "interfaces"
os.makedirs(output_dir, exist_ok=True)
output_path = os.path.join(output_dir, "openapi.json")

with open(output_path, "w") as f:
    json.dump(openapi_schema, f, indent=2)
