"""Detect the flavour of a loaded API description."""

from pathlib import Path

from openapi_checker.errors import BadSpecificationError


def detect_format(data: dict, file_path: Path) -> str:
    """Detect whether a loaded document is OpenAPI 3.x or Swagger 2.0.

    Returns: 'openapi' or 'swagger'.
    """
    if "openapi" in data:
        version = str(data["openapi"])
        if not version.startswith("3"):
            raise BadSpecificationError(file_path, f"unsupported openapi version {version}")
        return "openapi"
    if "swagger" in data:
        version = str(data["swagger"])
        if not version.startswith("2"):
            raise BadSpecificationError(file_path, f"unsupported swagger version {version}")
        return "swagger"

    raise BadSpecificationError(file_path, "document has neither an 'openapi' nor a 'swagger' version key")
