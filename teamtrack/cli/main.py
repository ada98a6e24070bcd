from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import setup_logging
from ..models.config_models import ImportConfig
from ..models.enums import UserRole
from ..services.demo_session import DemoSessionStore
from ..services.export import (
    TEMPLATE_FILENAME,
    default_export_filename,
    write_export_csv,
    write_export_xlsx,
    write_template,
)
from ..services.import_pipeline import ResourceImport, build_summary
from ..services.summary import log_summary, render_failed_rows
from ..storage.memory_backend import MemoryStorageActor
from ..storage.protocols import StorageActor, SubmitError
from ..tabular.reader import ParseError, parse_tabular

"""CLI entrypoint.

Subcommands:
- import FILE [--dry-run]   parse, validate and (unless dry-run) bulk submit
- template [--out PATH]     write the 21-column sample template
- export [--out] [--format] export stored resources as CSV / XLSX
- inspect FILE              print headers and the first rows
- demo login|logout|whoami  demo-mode session

Exit codes: 0 all good, 2 rows skipped by validation, 1 fatal.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


class StorageUnavailableError(Exception):
    pass


@contextmanager
def _storage(cfg: ImportConfig) -> Iterator[StorageActor]:
    """Yield the storage actor for this run.

    Connection settings, first match wins:
        1. `.env` (loaded with override in main())
        2. DATABASE_URL / PGDSN, then individual PGHOST / PGPORT / PGUSER /
           PGPASSWORD / PGDATABASE
        3. the config file's storage section

    DISABLE_DB_CONNECT=1 selects the in-memory actor (mock mode).
    """
    if os.getenv("DISABLE_DB_CONNECT") == "1":
        yield MemoryStorageActor()
        return

    try:
        import psycopg2
    except ImportError as e:
        raise StorageUnavailableError(f"psycopg2 not available: {e}") from e
    from ..storage.postgres_backend import PostgresStorageActor

    st = cfg.storage
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or st.dsn
    if not dsn:
        host = os.getenv("PGHOST", st.host or "localhost")
        port = os.getenv("PGPORT", str(st.port) if st.port else "5432")
        user = os.getenv("PGUSER", st.user or "postgres")
        password = os.getenv("PGPASSWORD", st.password or "")
        database = os.getenv("PGDATABASE", st.database or "postgres")
        dsn = f"host={host} port={port} user={user} dbname={database}"
        if password:
            dsn += f" password={password}"

    try:
        conn = psycopg2.connect(dsn)
    except psycopg2.Error as e:
        raise StorageUnavailableError(f"connection failed: {e}") from e
    try:
        actor = PostgresStorageActor(conn, table=st.table)
        actor.ensure_table()
        yield actor
    finally:
        conn.close()


def _load_env_file(path: Path, override: bool = True) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="teamtrack", description="TeamTrack resource import tool")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Import resources from a CSV / Excel file")
    imp.add_argument("file", type=Path)
    imp.add_argument("--dry-run", action="store_true", help="Validate only, do not submit")

    tpl = sub.add_parser("template", help="Write the import template CSV")
    tpl.add_argument("--out", type=Path, default=Path(TEMPLATE_FILENAME))

    exp = sub.add_parser("export", help="Export stored resources")
    exp.add_argument("--out", type=Path, default=None)
    exp.add_argument("--format", choices=["csv", "xlsx"], default="csv")

    ins = sub.add_parser("inspect", help="Print headers and first rows of a file")
    ins.add_argument("file", type=Path)
    ins.add_argument("--rows", type=int, default=3)

    demo = sub.add_parser("demo", help="Demo-mode session")
    demo_sub = demo.add_subparsers(dest="demo_command", required=True)
    login = demo_sub.add_parser("login")
    login.add_argument("role", choices=[r.value for r in UserRole])
    demo_sub.add_parser("logout")
    demo_sub.add_parser("whoami")
    return p.parse_args(argv)


def _resolve_config(path: Path | None, logger: Any) -> ImportConfig:
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.debug(f"{DEFAULT_CONFIG_PATH} not found -> defaults")
            return ImportConfig()
        path = DEFAULT_CONFIG_PATH
    return load_config(path)


def _cmd_import(args: argparse.Namespace, cfg: ImportConfig, logger: Any) -> int:
    path: Path = args.file
    if not path.exists():
        logger.error(f"file not found: {path}")
        return EXIT_FATAL

    job = ResourceImport(
        path.name, separator=cfg.separator, error_log=ErrorLogBuffer(cfg.error_log_dir)
    )
    try:
        job.parse(path.read_bytes())
    except ParseError:
        # already logged by the pipeline
        return EXIT_FATAL

    for line in render_failed_rows(build_summary(job.outcomes)):
        logger.warning(line)

    if args.dry_run:
        preview = build_summary(job.outcomes)
        logger.info(f"dry-run: {preview.success} rows would be imported")
        return EXIT_PARTIAL if preview.failed else EXIT_SUCCESS

    try:
        with _storage(cfg) as storage:
            summary = job.submit(storage)
    except StorageUnavailableError as e:
        logger.error(f"storage: {e}")
        return EXIT_FATAL
    except SubmitError:
        return EXIT_FATAL

    if summary is None:
        return EXIT_PARTIAL
    log_summary(summary)
    return EXIT_PARTIAL if summary.failed else EXIT_SUCCESS


def _cmd_export(args: argparse.Namespace, cfg: ImportConfig, logger: Any) -> int:
    out: Path = args.out or Path(default_export_filename(extension=args.format))
    try:
        with _storage(cfg) as storage:
            records = storage.list_resources()
    except StorageUnavailableError as e:
        logger.error(f"storage: {e}")
        return EXIT_FATAL
    if args.format == "xlsx":
        write_export_xlsx(records, out)
    else:
        write_export_csv(records, out)
    logger.info(f"exported {len(records)} resources to {out}")
    return EXIT_SUCCESS


def _cmd_inspect(args: argparse.Namespace, cfg: ImportConfig, logger: Any) -> int:
    path: Path = args.file
    if not path.exists():
        logger.error(f"file not found: {path}")
        return EXIT_FATAL
    try:
        data = parse_tabular(path.read_bytes(), path.name, cfg.separator)
    except ParseError as e:
        logger.error(f"parse: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name} rows={len(data.rows)}")
    print(f"  headers={[h.strip() for h in data.headers]}")
    for raw in data.rows[: max(args.rows, 0)]:
        print(f"  line {raw.line_number}: {list(raw.cells)}")
    return EXIT_SUCCESS


def _cmd_demo(args: argparse.Namespace, cfg: ImportConfig, logger: Any) -> int:
    store = DemoSessionStore(cfg.session_file)
    if args.demo_command == "login":
        store.login_as_demo(UserRole(args.role))
    elif args.demo_command == "logout":
        store.logout()
    else:
        profile = store.load()
        if profile is None:
            print("no demo session")
        else:
            print(f"{profile.name} ({profile.app_role.value})")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # only None reads sys.argv; main([]) from tests must not see pytest args
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)

    if args.command == "template":
        write_template(args.out)
        logger.info(f"template written: {args.out}")
        return EXIT_SUCCESS

    try:
        cfg = _resolve_config(args.config, logger)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    handlers = {
        "import": _cmd_import,
        "export": _cmd_export,
        "inspect": _cmd_inspect,
        "demo": _cmd_demo,
    }
    return handlers[args.command](args, cfg, logger)
