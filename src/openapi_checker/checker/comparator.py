"""Specification comparator — checks an implementation description against a reference.

Every path, operation, parameter, request body and 2xx JSON response shape
of the reference must exist in the implementation with a compatible type.
The walk is one-directional: entries only present in the implementation are
never visited.
"""

from typing import Callable

from openapi_checker.config import CompareOptions
from openapi_checker.parser.base import ApiDocument, Content, Operation, Parameter, PathItem, Schema

from .policy import Severity, SuppressionPolicy
from .result import CompareResult
from .rules import find_named, find_path, names_equal, type_compatible

EMPTY_PATHS_WARNING = "Doc paths is empty"

Trace = Callable[[str], None]

# (id(implementation schema), id(reference schema)) pairs on the active recursion path
_Visiting = set[tuple[int, int]]


class SpecificationComparator:
    """Compares two resolved API descriptions.

    The comparator holds no per-run state: every `compare` call collects its
    diagnostics into a fresh CompareResult, so an instance can be reused.
    `trace`, when given, is called with a "Checking ..." line at each path,
    operation, request body and response visited.
    """

    def __init__(self, options: CompareOptions | None = None, trace: Trace | None = None):
        self.options = options or CompareOptions()
        self.policy = SuppressionPolicy(self.options)
        self.trace = trace

    def compare(self, implementation: ApiDocument, reference: ApiDocument) -> CompareResult:
        result = CompareResult()
        if not reference.paths:
            result.record(Severity.WARNING, EMPTY_PATHS_WARNING)
            return result

        self._compare_paths(implementation.paths, reference.paths, result)
        return result

    def _trace(self, message: str) -> None:
        if self.trace is not None:
            self.trace(f"Checking {message}")

    def _compare_paths(
        self,
        impl_paths: dict[str, PathItem],
        ref_paths: dict[str, PathItem],
        result: CompareResult,
    ) -> None:
        for path, ref_item in ref_paths.items():
            self._trace(path)
            impl_key = find_path(path, impl_paths)
            path_key = self.policy.path_key(path)

            if impl_key is None and self.policy.is_suppressed(path_key):
                # operations under a known-unimplemented path are not reported one by one
                result.record(Severity.WARNING, f"{path} is not implemented")
                continue

            if impl_key is None:
                result.record(self.policy.classify(path_key), f"Missing path {path}")
                continue

            impl_item = impl_paths[impl_key]
            self._compare_operations(path, impl_item, ref_item, result)

    def _compare_operations(self, path: str, impl_item: PathItem, ref_item: PathItem, result: CompareResult) -> None:
        for verb, ref_op in ref_item.operations.items():
            op_path = f"{verb.display} {path}"
            self._trace(op_path)

            impl_op = impl_item.operations.get(verb)
            if impl_op is None:
                severity = self.policy.classify(self.policy.operation_key(verb.value, path))
                result.record(severity, f"Missing {path} operation: {verb.display}")
                continue

            self._compare_parameters(
                op_path,
                impl_op.parameters,
                ref_op.parameters + ref_item.parameters,
                result,
            )
            self._compare_request_body(op_path, impl_op, ref_op, result)
            self._compare_operation_responses(op_path, impl_op, ref_op, result)

    def _compare_parameters(
        self,
        scope: str,
        impl_params: list[Parameter],
        ref_params: list[Parameter],
        result: CompareResult,
    ) -> None:
        """Report reference parameters the implementation lacks. Extra ones are fine."""
        seen: set[str] = set()
        for ref_param in ref_params:
            name = ref_param.name.lower()
            if name in seen:
                continue
            seen.add(name)

            if not any(names_equal(p.name, ref_param.name) for p in impl_params):
                result.record(Severity.ERROR, f"Missing {scope} param: {ref_param.name}")

    def _compare_request_body(self, op_path: str, impl_op: Operation, ref_op: Operation, result: CompareResult) -> None:
        if ref_op.request_body is None:
            return
        if impl_op.request_body is None:
            result.record(Severity.ERROR, f"Missing {op_path}: requestBody")
            return

        self._trace(f"{op_path} requestBody")
        self._compare_contents(f"{op_path} body", impl_op.request_body, ref_op.request_body, result)

    def _compare_operation_responses(
        self, op_path: str, impl_op: Operation, ref_op: Operation, result: CompareResult
    ) -> None:
        if ref_op.responses is None:
            return
        if impl_op.responses is None:
            result.record(Severity.ERROR, f"Missing {op_path}: responses")
            return

        self._compare_responses(f"{op_path} responses", impl_op.responses, ref_op.responses, result)

    def _compare_responses(
        self,
        scope: str,
        impl_responses: dict[str, Content],
        ref_responses: dict[str, Content],
        result: CompareResult,
    ) -> None:
        self._trace(scope)
        for code, ref_response in ref_responses.items():
            if not code.startswith("2"):
                continue

            impl_response = impl_responses.get(code)
            if impl_response is None:
                result.record(Severity.ERROR, f"Missing {scope} response: {code}")
                continue

            self._trace(f"{scope} {code}")
            self._compare_contents(f"{scope} {code}", impl_response, ref_response, result)

    def _compare_contents(self, scope: str, impl_content: Content, ref_content: Content, result: CompareResult) -> None:
        """Compare the application/json schemas. Other media types are not checked."""
        ref_media = ref_content.json_media
        if ref_media is None:
            return

        impl_media = impl_content.json_media
        if impl_media is None:
            result.record(Severity.ERROR, f"Missing application/json mediatype for {scope}")
            return

        self._compare_schemas(scope, impl_media.schema_, ref_media.schema_, result, set())

    def _compare_schemas(
        self,
        scope: str,
        impl_schema: Schema,
        ref_schema: Schema,
        result: CompareResult,
        visiting: _Visiting,
    ) -> None:
        pair = (id(impl_schema), id(ref_schema))
        if pair in visiting:
            # already being compared further up: a recursive schema
            return
        visiting.add(pair)

        if not type_compatible(impl_schema.type, ref_schema.type):
            result.record(
                Severity.ERROR,
                f"{scope}: has invalid {impl_schema.type} type. Expected: {ref_schema.type}",
            )

        if not ref_schema.type:
            result.record(Severity.WARNING, f"{scope} can not be parsed as AnyOf, OneOf, AllOf is not supported")
        elif ref_schema.type == "array" and ref_schema.items is not None:
            self._compare_schemas(
                f"{scope} -> array",
                impl_schema.items or Schema(),
                ref_schema.items,
                result,
                visiting,
            )
        elif ref_schema.type == "object":
            name = ref_schema.display_name
            object_scope = f"{scope} -> {name}" if name else scope
            self._compare_properties(object_scope, impl_schema, ref_schema, result, visiting)

        visiting.discard(pair)

    def _compare_properties(
        self,
        scope: str,
        impl_schema: Schema,
        ref_schema: Schema,
        result: CompareResult,
        visiting: _Visiting,
    ) -> None:
        for name, ref_prop in ref_schema.properties.items():
            impl_prop = find_named(name, impl_schema.properties)
            if impl_prop is None:
                result.record(Severity.ERROR, f"Missing {scope} property: {name}")
                continue

            self._compare_schemas(f"{scope} -> {name}", impl_prop, ref_prop, result, visiting)
