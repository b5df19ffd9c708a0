"""OpenAPI / Swagger document reader.

Reads OpenAPI 3.x and Swagger 2.0 documents (YAML or JSON) into a fully
resolved ApiDocument. Every local `$ref` is replaced by the node it points
to. A referenced schema is built once and shared, so recursive schemas end
up as a cyclic object graph.
"""

from pathlib import Path
from urllib.parse import unquote

import yaml

from openapi_checker.errors import BadSpecificationError

from .base import JSON_MEDIA_TYPE, ApiDocument, Content, MediaType, Operation, Parameter, PathItem, Schema, Verb
from .detect import detect_format

VERBS = {verb.value for verb in Verb}


def parse_openapi(file_path: Path) -> ApiDocument:
    """Parse an OpenAPI/Swagger file into a resolved ApiDocument."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BadSpecificationError(file_path, f"can not be read: {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise BadSpecificationError(file_path, f"invalid YAML/JSON: {e}") from e

    if not isinstance(doc, dict):
        raise BadSpecificationError(file_path, "document is not a mapping")

    fmt = detect_format(doc, file_path)
    return _DocumentReader(doc, file_path, swagger=fmt == "swagger").read()


class _DocumentReader:
    """Builds resolved models from one loaded document."""

    def __init__(self, doc: dict, file_path: Path, swagger: bool = False):
        self.doc = doc
        self.file_path = file_path
        self.swagger = swagger
        # $ref string or id() of an inline node -> built Schema
        self._schemas: dict[str | int, Schema] = {}
        self._aliases: set[str] = set()

    def read(self) -> ApiDocument:
        paths = self.doc.get("paths") or {}
        if not isinstance(paths, dict):
            raise BadSpecificationError(self.file_path, "'paths' is not a mapping")

        result = {}
        for path, raw_item in paths.items():
            item = self._deref(raw_item)
            if not isinstance(item, dict):
                raise BadSpecificationError(self.file_path, f"path item {path} is not a mapping")
            result[str(path)] = self._path_item(item)

        return ApiDocument(paths=result)

    def _path_item(self, item: dict) -> PathItem:
        params, body_param = self._parameters(item.get("parameters"))
        operations = {}
        for key, raw_op in item.items():
            if str(key).lower() not in VERBS:
                continue
            op = self._deref(raw_op)
            if not isinstance(op, dict):
                raise BadSpecificationError(self.file_path, f"operation {key} is not a mapping")
            operations[Verb(str(key).lower())] = self._operation(op, body_param)
        return PathItem(parameters=params, operations=operations)

    def _operation(self, op: dict, path_body_param: dict | None) -> Operation:
        params, body_param = self._parameters(op.get("parameters"))

        if self.swagger:
            body_param = body_param or path_body_param
            request_body = self._json_content(body_param.get("schema")) if body_param else None
        else:
            raw_body = self._deref(op.get("requestBody"))
            request_body = self._content(raw_body) if isinstance(raw_body, dict) else None

        responses = None
        if "responses" in op:
            responses = {}
            for code, raw_resp in (op["responses"] or {}).items():
                resp = self._deref(raw_resp)
                if not isinstance(resp, dict):
                    resp = {}
                if self.swagger:
                    responses[str(code)] = self._json_content(resp["schema"]) if "schema" in resp else Content()
                else:
                    responses[str(code)] = self._content(resp)

        return Operation(parameters=params, request_body=request_body, responses=responses)

    def _parameters(self, raw_params: list | None) -> tuple[list[Parameter], dict | None]:
        """Split raw parameters into named parameters and a Swagger 2.0 body parameter."""
        result = []
        body = None
        for raw in raw_params or []:
            p = self._deref(raw)
            if not isinstance(p, dict) or "name" not in p:
                raise BadSpecificationError(self.file_path, "parameter without a name")
            if p.get("in") == "body":
                body = p
                continue
            result.append(Parameter(name=str(p["name"]), location=str(p.get("in") or "query")))
        return result, body

    def _content(self, raw: dict) -> Content:
        content = {}
        for media_type, raw_media in (raw.get("content") or {}).items():
            media = self._deref(raw_media)
            schema = media.get("schema") if isinstance(media, dict) else None
            content[str(media_type)] = MediaType(schema=self._schema(schema))
        return Content(content=content)

    def _json_content(self, raw_schema) -> Content:
        return Content(content={JSON_MEDIA_TYPE: MediaType(schema=self._schema(raw_schema))})

    def _schema(self, raw) -> Schema:
        if not isinstance(raw, dict):
            return Schema()

        ref = raw.get("$ref")
        if ref is None:
            key = id(raw)
            if key in self._schemas:
                return self._schemas[key]
            schema = Schema()
            self._schemas[key] = schema
            return self._build_schema(raw, schema)

        if ref in self._schemas:
            return self._schemas[ref]

        target = self._resolve(ref)
        if isinstance(target, dict) and "$ref" in target:
            if ref in self._aliases:
                raise BadSpecificationError(self.file_path, f"circular $ref {ref}")
            self._aliases.add(ref)
            schema = self._schema(target)
            self._schemas[ref] = schema
            return schema

        schema = Schema(reference_id=_ref_name(ref))
        self._schemas[ref] = schema
        if not isinstance(target, dict):
            return schema
        return self._build_schema(target, schema)

    def _build_schema(self, raw: dict, schema: Schema) -> Schema:
        """Fill a registered Schema node; children may point back at it."""
        schema.type = _schema_type(raw)
        title = raw.get("title")
        schema.title = str(title) if title else None
        if "items" in raw:
            schema.items = self._schema(raw["items"])
        properties = raw.get("properties") or {}
        schema.properties = {str(name): self._schema(prop) for name, prop in properties.items()}
        return schema

    def _deref(self, raw):
        """Follow a chain of non-schema `$ref`s to the node it ends at."""
        seen = set()
        while isinstance(raw, dict) and "$ref" in raw:
            ref = raw["$ref"]
            if ref in seen:
                raise BadSpecificationError(self.file_path, f"circular $ref {ref}")
            seen.add(ref)
            raw = self._resolve(ref)
        return raw

    def _resolve(self, ref) -> object:
        """Resolve a local JSON pointer such as '#/components/schemas/Pet'."""
        if not isinstance(ref, str) or not ref.startswith("#"):
            raise BadSpecificationError(self.file_path, f"external $ref {ref} is not supported")

        node = self.doc
        pointer = unquote(ref[1:])
        if not pointer:
            return node
        for raw_token in pointer.lstrip("/").split("/"):
            token = raw_token.replace("~1", "/").replace("~0", "~")
            if isinstance(node, dict) and token in node:
                node = node[token]
            elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
                node = node[int(token)]
            else:
                raise BadSpecificationError(self.file_path, f"unresolved $ref {ref}")
        return node


def _ref_name(ref: str) -> str:
    return unquote(ref).rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")


def _schema_type(raw: dict) -> str:
    """Declared type, or '' for combinators and untyped schemas.

    OpenAPI 3.1 list types use the first non-null entry.
    """
    declared = raw.get("type")
    if isinstance(declared, list):
        declared = next((t for t in declared if t != "null"), None)
    return str(declared) if declared else ""
