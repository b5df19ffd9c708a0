from openapi_checker.checker.policy import Severity, SuppressionPolicy
from openapi_checker.checker.rules import find_named, find_path, names_equal, paths_equal, type_compatible
from openapi_checker.config import CompareOptions, load_not_implemented


class TestMatchRules:
    def test_paths_equal_ignores_case(self):
        assert paths_equal("/Users/{id}", "/users/{id}")
        assert not paths_equal("/users", "/users/")

    def test_names_equal_ignores_case(self):
        assert names_equal("petId", "PETID")
        assert not names_equal("pet_id", "petId")

    def test_type_compatible(self):
        assert type_compatible("string", "string")
        assert type_compatible("integer", "number")
        assert not type_compatible("number", "integer")
        assert not type_compatible("string", "object")

    def test_empty_declared_type_accepts_anything(self):
        assert type_compatible("object", "")
        assert type_compatible("", "")

    def test_find_path_returns_implementation_key(self):
        assert find_path("/pets", ["/users", "/Pets"]) == "/Pets"
        assert find_path("/orders", ["/users"]) is None

    def test_find_named_prefers_exact_match(self):
        items = {"Id": 1, "id": 2}
        assert find_named("id", items) == 2
        assert find_named("ID", items) == 1
        assert find_named("name", items) is None


class TestSuppressionPolicy:
    def test_classify_allow_listed_key_as_warning(self):
        policy = SuppressionPolicy(CompareOptions(not_implemented={"/pets", "post /orders"}))
        assert policy.classify("/pets") == Severity.WARNING
        assert policy.classify("post /orders") == Severity.WARNING
        assert policy.classify("get /orders") == Severity.ERROR

    def test_default_policy_has_no_suppressions(self):
        assert SuppressionPolicy().classify("/pets") == Severity.ERROR

    def test_keys_are_lower_cased(self):
        assert SuppressionPolicy.path_key("/Pets") == "/pets"
        assert SuppressionPolicy.operation_key("POST", "/Orders") == "post /orders"


class TestConfig:
    def test_options_lower_case_entries(self):
        options = CompareOptions(not_implemented=["POST /Orders", " /Pets "])
        assert options.not_implemented == frozenset({"post /orders", "/pets"})

    def test_load_not_implemented(self, tmp_path):
        f = tmp_path / "wip.txt"
        f.write_text("# not done yet\n/Stores\n\nDELETE /pets/{petId}  \n", encoding="utf-8")
        assert load_not_implemented(f) == {"/stores", "delete /pets/{petid}"}

    def test_load_without_file(self):
        assert load_not_implemented(None) == set()
