"""Database driver registry.

Maps a database type key (``postgres``, ``bigquery``, ...) to the npm
package(s) that provide the Cube.js driver and to the environment variables
the driver reads.  Types with no dedicated driver can still be served by the
generic JDBC bridge when a :class:`JdbcDescriptor` is registered for them.

Third parties extend the registry through :meth:`DriverRegistry.register`
and :meth:`DriverRegistry.register_jdbc`.
"""

from __future__ import annotations

from dataclasses import dataclass

from .packages import MavenDependency

JDBC_DRIVER_PACKAGE = "@cubejs-backend/jdbc-driver"
MAVEN_HELPER_PACKAGE = "node-java-maven"
MAVEN_INSTALL_SCRIPT = "./node_modules/.bin/node-java-maven"

_SQL_ENV = (
    "CUBEJS_DB_HOST",
    "CUBEJS_DB_NAME",
    "CUBEJS_DB_PORT",
    "CUBEJS_DB_USER",
    "CUBEJS_DB_PASS",
)
_AWS_ENV = (
    "CUBEJS_AWS_KEY",
    "CUBEJS_AWS_SECRET",
    "CUBEJS_AWS_REGION",
    "CUBEJS_AWS_S3_OUTPUT_LOCATION",
)
_JDBC_ENV = ("CUBEJS_DB_NAME", "CUBEJS_JDBC_URL", "CUBEJS_JDBC_DRIVER")


@dataclass(frozen=True)
class DriverSpec:
    """Capabilities of a database driver."""

    db_type: str
    packages: tuple[str, ...]
    env_variables: tuple[str, ...] = ()

    @property
    def is_jdbc_bridge(self) -> bool:
        return bool(self.packages) and self.packages[0] == JDBC_DRIVER_PACKAGE


@dataclass(frozen=True)
class JdbcDescriptor:
    """How the JDBC bridge connects to a database type."""

    db_type: str
    driver_class: str
    maven_dependency: MavenDependency | None = None
    env_variables: tuple[str, ...] = _JDBC_ENV


class DriverRegistry:
    """Lookup of driver capabilities keyed by database type."""

    def __init__(self) -> None:
        self._drivers: dict[str, DriverSpec] = {}
        self._jdbc: dict[str, JdbcDescriptor] = {}

    def register(self, spec: DriverSpec) -> None:
        if not spec.packages:
            raise ValueError(f"Driver for {spec.db_type!r} declares no packages")
        self._drivers[spec.db_type] = spec

    def register_jdbc(self, descriptor: JdbcDescriptor) -> None:
        self._jdbc[descriptor.db_type] = descriptor

    def keys(self) -> list[str]:
        """Database types with a dedicated driver, in registration order."""
        return list(self._drivers)

    def resolve(self, db_type: str | None) -> DriverSpec | None:
        """Return the driver for *db_type*.

        A dedicated driver wins; otherwise a type known to the JDBC bridge
        resolves to the bridge package.  ``None`` means unsupported.
        """
        if not db_type:
            return None
        spec = self._drivers.get(db_type)
        if spec is not None:
            return spec
        descriptor = self._jdbc.get(db_type)
        if descriptor is not None:
            return DriverSpec(
                db_type=db_type,
                packages=(JDBC_DRIVER_PACKAGE,),
                env_variables=descriptor.env_variables,
            )
        return None

    def jdbc_descriptor(self, db_type: str | None) -> JdbcDescriptor | None:
        if not db_type:
            return None
        return self._jdbc.get(db_type)


# ---------------------------------------------------------------------------
# Built-in drivers
# ---------------------------------------------------------------------------

_BUILTIN_DRIVERS: tuple[DriverSpec, ...] = (
    DriverSpec("postgres", ("@cubejs-backend/postgres-driver",), _SQL_ENV),
    DriverSpec("mysql", ("@cubejs-backend/mysql-driver",), _SQL_ENV),
    DriverSpec("mongobi", ("@cubejs-backend/mongobi-driver",), _SQL_ENV),
    DriverSpec("athena", ("@cubejs-backend/athena-driver",), _AWS_ENV),
    DriverSpec("jdbc", (JDBC_DRIVER_PACKAGE,), _JDBC_ENV),
    DriverSpec("mssql", ("@cubejs-backend/mssql-driver",), _SQL_ENV),
    DriverSpec("clickhouse", ("@cubejs-backend/clickhouse-driver",), _SQL_ENV),
    DriverSpec(
        "snowflake",
        ("@cubejs-backend/snowflake-driver",),
        (
            "CUBEJS_DB_NAME",
            "CUBEJS_DB_SNOWFLAKE_ACCOUNT",
            "CUBEJS_DB_SNOWFLAKE_REGION",
            "CUBEJS_DB_SNOWFLAKE_WAREHOUSE",
            "CUBEJS_DB_SNOWFLAKE_ROLE",
            "CUBEJS_DB_USER",
            "CUBEJS_DB_PASS",
        ),
    ),
    DriverSpec("presto", ("@cubejs-backend/prestodb-driver",), _SQL_ENV),
    DriverSpec("prestodb", ("@cubejs-backend/prestodb-driver",), _SQL_ENV),
    DriverSpec(
        "bigquery",
        ("@cubejs-backend/bigquery-driver",),
        ("CUBEJS_DB_BQ_PROJECT_ID", "CUBEJS_DB_BQ_KEY_FILE"),
    ),
    DriverSpec("redshift", ("@cubejs-backend/postgres-driver",), _SQL_ENV),
    DriverSpec("druid", ("@cubejs-backend/druid-driver",), ("CUBEJS_DB_URL", "CUBEJS_DB_USER", "CUBEJS_DB_PASS")),
    DriverSpec("oracle", ("@cubejs-backend/oracle-driver",), _SQL_ENV),
    DriverSpec("sqlite", ("@cubejs-backend/sqlite-driver",), ("CUBEJS_DB_NAME",)),
    DriverSpec("hive", ("@cubejs-backend/hive-driver",), _SQL_ENV),
    DriverSpec(
        "elasticsearch",
        ("@cubejs-backend/elasticsearch-driver",),
        ("CUBEJS_DB_URL", "CUBEJS_DB_ELASTIC_QUERY_FORMAT"),
    ),
    DriverSpec("dremio", ("@cubejs-backend/dremio-driver",), _SQL_ENV),
)

_BUILTIN_JDBC: tuple[JdbcDescriptor, ...] = (
    JdbcDescriptor(
        db_type="athena",
        driver_class="com.simba.athena.jdbc.Driver",
        maven_dependency=MavenDependency(
            group_id="com.syncron.amazonaws",
            artifact_id="simba-athena-jdbc-driver",
            version="2.0.2",
        ),
        env_variables=_AWS_ENV,
    ),
    JdbcDescriptor(
        db_type="sparksql",
        driver_class="org.apache.hive.jdbc.HiveDriver",
        maven_dependency=MavenDependency(
            group_id="org.apache.hive",
            artifact_id="hive-jdbc",
            version="2.3.5",
        ),
    ),
    # Generic bridge: the user supplies the driver jar and class themselves.
    JdbcDescriptor(db_type="jdbc", driver_class=""),
)


def default_registry() -> DriverRegistry:
    """Return a fresh registry holding the built-in Cube.js drivers."""
    registry = DriverRegistry()
    for spec in _BUILTIN_DRIVERS:
        registry.register(spec)
    for descriptor in _BUILTIN_JDBC:
        registry.register_jdbc(descriptor)
    return registry
