"""
Environment engine registry tests
"""

from pathlib import Path

import pytest

from assetmill import Environment, EngineRegistry, InvalidExtensionError
from assetmill.engines.registry import get_global_registry, register_engine


class TestEnvironmentEngines:
    """Engines surfaced on an Environment"""

    def test_seeded_from_global_registry(self, coffee_engine):
        register_engine(".coffee", coffee_engine)

        environment = Environment()

        assert environment.engines(".coffee") is coffee_engine
        assert environment.engine_extensions == [".coffee"]

    def test_later_global_registrations_do_not_leak(self, coffee_engine, sass_engine):
        register_engine(".coffee", coffee_engine)
        environment = Environment()

        register_engine(".sass", sass_engine)

        assert environment.engines(".sass") is None
        assert environment.engine_extensions == [".coffee"]

    def test_local_registration_stays_local(self, sass_engine):
        environment = Environment()

        environment.register_engine("sass", sass_engine)

        assert environment.engines(".sass") is sass_engine
        assert get_global_registry().engines(".sass") is None

    def test_local_override_of_global_engine(self, coffee_engine, sass_engine):
        register_engine(".coffee", coffee_engine)
        environment = Environment()

        environment.register_engine(".coffee", sass_engine)

        assert environment.engines(".coffee") is sass_engine
        assert get_global_registry().engines(".coffee") is coffee_engine

    def test_environments_are_isolated(self, coffee_engine):
        first = Environment()
        second = Environment()

        first.register_engine(".coffee", coffee_engine)

        assert second.engines(".coffee") is None

    def test_snapshot_from_environment(self, coffee_engine, sass_engine):
        environment = Environment()
        environment.register_engine(".coffee", coffee_engine)

        snapshot = environment.engines()
        snapshot[".sass"] = sass_engine

        assert environment.engines() == {".coffee": coffee_engine}

    def test_explicit_registry_is_owned(self, coffee_engine):
        registry = EngineRegistry({".coffee": coffee_engine})

        environment = Environment(registry=registry)

        assert environment.registry is registry
        assert environment.engines("coffee") is coffee_engine

    def test_root_is_a_path(self):
        assert Environment("assets").root == Path("assets")
        assert Environment().root is None

    def test_invalid_extension_propagates(self, coffee_engine):
        environment = Environment()

        with pytest.raises(InvalidExtensionError):
            environment.register_engine("", coffee_engine)

    def test_spec_scenario(self, sass_engine):
        """Distinct dotted keys are both listed and resolvable"""
        other = object()
        environment = Environment()

        environment.register_engine(".sass", sass_engine)
        environment.register_engine("sass.special", other)

        assert set(environment.engine_extensions) == {".sass", ".sass.special"}
        assert environment.engines(".sass") is sass_engine


class TestEnvironmentRegistrationFailures:
    """Normalization is the only way registration can fail"""

    def test_register_succeeds_when_system_root_unwritable(self, unwritable_system_root, coffee_engine):
        environment = Environment()

        environment.register_engine(".coffee", coffee_engine)

        assert environment.engines("coffee") is coffee_engine
        assert environment.engine_extensions == [".coffee"]
        assert not unwritable_system_root.exists()

    def test_environment_usable_after_activity_log_failure(self, unwritable_system_root, coffee_engine, sass_engine):
        environment = Environment()
        environment.register_engine(".coffee", coffee_engine)

        environment.register_engine(".coffee", sass_engine)
        environment.register_engine(".sass", sass_engine)

        assert environment.engines() == {".coffee": sass_engine, ".sass": sass_engine}

    def test_invalid_extension_leaves_environment_unchanged(self, unwritable_system_root, coffee_engine):
        environment = Environment()
        environment.register_engine(".coffee", coffee_engine)

        with pytest.raises(InvalidExtensionError):
            environment.register_engine(".", object())

        assert environment.engines() == {".coffee": coffee_engine}
