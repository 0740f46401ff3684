"""Unit tests for propfile.resolvers."""

from propfile.properties import Properties
from propfile.resolvers import environment_resolver, mapping_resolver, substitute_env


class TestSubstituteEnv:
    def test_known(self):
        assert substitute_env("${A}", {"A": "1"}) == "1"

    def test_unknown_left_alone(self):
        assert substitute_env("x${NOPE}y", {}) == "x${NOPE}y"

    def test_multiple_tokens(self):
        env = {"HOST": "db", "PORT": "5432"}
        assert substitute_env("${HOST}:${PORT}/${NAME}", env) == "db:5432/${NAME}"

    def test_value_trimmed(self):
        assert substitute_env("${A}", {"A": "  spaced  "}) == "spaced"

    def test_name_is_exact(self):
        assert substitute_env("${a}", {"A": "1"}) == "${a}"

    def test_invalid_names_not_tokens(self):
        assert substitute_env("${A-B} ${} $A", {"A": "1"}) == "${A-B} ${} $A"


class TestEnvironmentResolver:
    def test_reads_process_env(self, monkeypatch):
        monkeypatch.setenv("PROPFILE_RESOLVER_TEST", "on")
        assert environment_resolver("flag=${PROPFILE_RESOLVER_TEST}") == "flag=on"

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("PROPFILE_RESOLVER_UNSET", raising=False)
        assert environment_resolver("${PROPFILE_RESOLVER_UNSET}") == "${PROPFILE_RESOLVER_UNSET}"


class TestMappingResolver:
    def test_fixed_values(self):
        resolve = mapping_resolver({"ENV": "prod"})
        assert resolve("app-${ENV}") == "app-prod"

    def test_registered_once_by_name(self):
        props = Properties({"a": "${ENV}"})
        assert props.add_resolver(mapping_resolver({"ENV": "prod"}), name="defaults") is True
        assert props.add_resolver(mapping_resolver({"ENV": "dev"}), name="defaults") is False
        assert props.get("a") == "prod"
