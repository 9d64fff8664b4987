"""Unit tests for the database driver registry (cubecli.drivers)."""

from __future__ import annotations

import pytest

from cubecli.drivers import (
    JDBC_DRIVER_PACKAGE,
    MAVEN_HELPER_PACKAGE,
    DriverRegistry,
    DriverSpec,
    JdbcDescriptor,
    default_registry,
)
from cubecli.packages import MavenDependency
from cubecli.scaffolder.create import driver_packages

pytestmark = pytest.mark.unit


class TestDefaultRegistry:
    def test_common_databases_present(self):
        keys = default_registry().keys()
        for db_type in ("postgres", "mysql", "mongobi", "athena", "redshift", "bigquery",
                        "mssql", "clickhouse", "snowflake", "presto", "jdbc"):
            assert db_type in keys

    def test_keys_keep_registration_order(self):
        keys = default_registry().keys()
        assert keys[0] == "postgres"
        assert keys.index("mysql") < keys.index("bigquery")

    def test_redshift_uses_postgres_driver(self):
        spec = default_registry().resolve("redshift")
        assert spec is not None
        assert spec.packages == ("@cubejs-backend/postgres-driver",)

    def test_driver_env_variables(self):
        spec = default_registry().resolve("bigquery")
        assert spec.env_variables == ("CUBEJS_DB_BQ_PROJECT_ID", "CUBEJS_DB_BQ_KEY_FILE")

    def test_fresh_instance_each_call(self):
        first = default_registry()
        first.register(DriverSpec("extra", ("extra-driver",)))
        assert "extra" not in default_registry().keys()


class TestResolve:
    def test_unknown_type_is_none(self):
        assert default_registry().resolve("cassandra") is None

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_type_is_none(self, value):
        assert default_registry().resolve(value) is None

    def test_dedicated_driver_wins_over_jdbc(self):
        spec = default_registry().resolve("athena")
        assert spec.packages == ("@cubejs-backend/athena-driver",)
        assert not spec.is_jdbc_bridge

    def test_jdbc_only_type_resolves_to_bridge(self):
        registry = default_registry()
        spec = registry.resolve("sparksql")
        assert spec.packages == (JDBC_DRIVER_PACKAGE,)
        assert spec.is_jdbc_bridge
        assert spec.env_variables == registry.jdbc_descriptor("sparksql").env_variables
        # JDBC-only types are resolvable but not offered in the prompt.
        assert "sparksql" not in registry.keys()

    def test_jdbc_descriptor_lookup(self):
        descriptor = default_registry().jdbc_descriptor("athena")
        assert descriptor.driver_class == "com.simba.athena.jdbc.Driver"
        assert descriptor.maven_dependency == MavenDependency(
            groupId="com.syncron.amazonaws",
            artifactId="simba-athena-jdbc-driver",
            version="2.0.2",
        )
        assert default_registry().jdbc_descriptor("postgres") is None
        assert default_registry().jdbc_descriptor(None) is None


class TestRegistration:
    def test_register_driver(self):
        registry = DriverRegistry()
        registry.register(DriverSpec("duckdb", ("cube-duckdb-driver",), ("CUBEJS_DB_DUCKDB_PATH",)))
        assert registry.keys() == ["duckdb"]
        assert registry.resolve("duckdb").env_variables == ("CUBEJS_DB_DUCKDB_PATH",)

    def test_register_replaces_existing(self):
        registry = default_registry()
        registry.register(DriverSpec("postgres", ("my-postgres-driver",)))
        assert registry.resolve("postgres").packages == ("my-postgres-driver",)
        assert registry.keys().count("postgres") == 1

    def test_register_without_packages_rejected(self):
        with pytest.raises(ValueError):
            DriverRegistry().register(DriverSpec("broken", ()))

    def test_register_jdbc(self):
        registry = DriverRegistry()
        registry.register_jdbc(JdbcDescriptor(db_type="db2", driver_class="com.ibm.db2.jcc.DB2Driver"))
        assert registry.resolve("db2").is_jdbc_bridge
        assert registry.keys() == []


class TestDriverPackages:
    def test_helper_appended_for_bridge(self):
        assert driver_packages(DriverSpec("jdbc", (JDBC_DRIVER_PACKAGE,))) == [
            JDBC_DRIVER_PACKAGE,
            MAVEN_HELPER_PACKAGE,
        ]

    def test_plain_driver_unchanged(self):
        assert driver_packages(DriverSpec("pg", ("@cubejs-backend/postgres-driver",))) == [
            "@cubejs-backend/postgres-driver"
        ]
