from __future__ import annotations

import typing as t
from pathlib import Path

import alembic.config
import sqlalchemy
import sqlalchemy.event
import sqlalchemy.orm
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Factory, Object, Provider, Resource, Singleton
from sqlalchemy.engine.url import URL as DSN

import brainburst.lib.json as json

from ..config.secrets import DatabaseSecrets
from ..config.storage import DatabaseSettings, StorageSettings
from ..di import NotReady
from ..provider import LoggingProvider

ConnectListener = t.Callable[[t.Any, t.Any], None]


def sqlite_connect(dbapi_conn: t.Any, _: t.Any) -> None:
    """Hand transaction control to SQLAlchemy and enforce foreign keys.

    pysqlite otherwise defers BEGIN until the first DML statement, which
    breaks SAVEPOINT and makes a read-then-write unit of work non-atomic.
    """
    dbapi_conn.isolation_level = None
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def sqlite_begin(conn: sqlalchemy.Connection) -> None:
    conn.exec_driver_sql("BEGIN")


def postgresql_connect(dbapi_conn: t.Any, _: t.Any) -> None:
    """Have the server hand back ``timestamptz`` values in UTC."""
    cursor = dbapi_conn.cursor()
    cursor.execute("SET TIMEZONE TO 'UTC'")
    cursor.close()


def create_dsn(config: DatabaseSettings, secrets: DatabaseSecrets) -> DSN:
    if config.is_sqlite:
        return DSN.create(config.driver, database=config.database)

    def reveal(secret: t.Any) -> str | None:
        return secret.get_secret_value() if secret is not None else None

    return DSN.create(
        config.driver,
        host=str(config.host) if config.host else None,
        port=config.port,
        database=config.database,
        username=reveal(secrets.username),
        password=reveal(secrets.password),
    )


def provide_alembic_conf(
    migration_path: Path, config: DatabaseSettings, secrets: DatabaseSecrets, root: Path | NotReady
) -> alembic.config.Config:
    if isinstance(root, NotReady):
        raise RuntimeError("alembic needs the project root, which is set at boot")

    # alembic interpolates its ini values, so a literal % must be doubled
    url = create_dsn(config, secrets).render_as_string(hide_password=False).replace("%", "%%")
    ac = alembic.config.Config()
    ac.set_main_option("script_location", str(root / migration_path))
    ac.set_section_option("alembic", "sqlalchemy.url", url)
    ac.set_section_option("alembic", "file_template", "%%(rev)s_%%(slug)s")
    return ac


def provide_engine(config: DatabaseSettings, secrets: DatabaseSecrets, logging: LoggingProvider) -> sqlalchemy.Engine:
    options: dict[str, t.Any] = {
        "echo": config.echo,
        "json_serializer": json.dumps,
        "json_deserializer": json.loads,
    }
    if config.is_sqlite:
        # worker threads share the file; a writer waits for the lock instead of failing
        options["connect_args"] = {"check_same_thread": False, "timeout": 30}
        engine = sqlalchemy.create_engine(create_dsn(config, secrets), **options)
        sqlalchemy.event.listen(engine, "connect", sqlite_connect)
        sqlalchemy.event.listen(engine, "begin", sqlite_begin)
    else:
        engine = sqlalchemy.create_engine(create_dsn(config, secrets), **options)
        sqlalchemy.event.listen(engine, "connect", postgresql_connect)

    logging.get_logger().info(
        "database engine ready",
        extra={"driver": config.driver, "database": config.database, "host": config.host, "port": config.port},
    )
    return engine


def provide_session(engine: sqlalchemy.Engine) -> sqlalchemy.orm.Session:
    """A new session with no transaction begun. Whoever asks for it closes it (see ``di.Manage``)."""
    return sqlalchemy.orm.Session(engine, autobegin=False, autoflush=False, expire_on_commit=False)


class PersistentContainer(DeclarativeContainer):
    config = Configuration()
    secrets = Configuration()
    logging: Provider[LoggingProvider] = Resource()
    root: Provider[Path | NotReady] = Object()

    database_config = config.database.as_(DatabaseSettings)
    database_secrets = secrets.database.as_(DatabaseSecrets)

    engine: Provider[sqlalchemy.Engine] = Singleton(
        provide_engine, config=database_config, secrets=database_secrets, logging=logging
    )
    session: Provider[sqlalchemy.orm.Session] = Factory(provide_session, engine=engine)
    alembic_config: Provider[alembic.config.Config] = Singleton(
        provide_alembic_conf,
        migration_path=Path("migrations"),
        config=database_config,
        secrets=database_secrets,
        root=root,
    )


class StorageContainer(DeclarativeContainer):
    config: Provider[StorageSettings] = Configuration(strict=True)
    secrets = Configuration(strict=True)
    logging: Provider[LoggingProvider] = Resource()
    root: Provider[Path | NotReady] = Object()

    persistent: Provider[PersistentContainer] = Container(
        PersistentContainer, config=config.persistent, secrets=secrets, logging=logging, root=root
    )
