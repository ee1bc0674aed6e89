"""``sipp`` command line: terminal client, server, auth and upload."""

from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path
from typing import Optional, Sequence

from sipp.backend import Backend, BackendError, resolve_backend, share_url
from sipp.config import ClientConfig, ConfigError, config_path, env, save_config
from sipp.runtime import telemetry
from sipp.store import DEFAULT_DB_PATH, StoreError


def _client_backend(args: argparse.Namespace) -> Backend:
    return resolve_backend(
        remote_url=args.remote, api_key=args.api_key, db_path=args.db
    )


def _fail(message: str) -> int:
    print(f"sipp: {message}", file=sys.stderr)
    return 1


def cmd_tui(args: argparse.Namespace) -> int:
    from sipp.adapters.textual.app import run_tui

    try:
        backend = _client_backend(args)
    except BackendError as exc:
        return _fail(str(exc))
    try:
        run_tui(backend)
    finally:
        backend.close()
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from sipp.server import ServerSettings, serve

    settings = ServerSettings.from_env()
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.db:
        settings.db_path = args.db
    try:
        serve(settings)
    except StoreError as exc:
        return _fail(str(exc))
    return 0


def cmd_auth(args: argparse.Namespace) -> int:
    del args
    try:
        remote_url = input("Remote URL: ").strip()
        api_key = getpass.getpass("API Key: ").strip()
    except (EOFError, KeyboardInterrupt):
        return _fail("aborted")
    config = ClientConfig(remote_url=remote_url or None, api_key=api_key or None)
    try:
        target = save_config(config)
    except ConfigError as exc:
        return _fail(str(exc))
    print(f"Config saved to {target}")
    return 0


def cmd_upload(args: argparse.Namespace) -> int:
    path = Path(args.file)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return _fail(f"Failed to read file: {exc}")
    try:
        backend = _client_backend(args)
    except BackendError as exc:
        return _fail(str(exc))
    try:
        snippet = backend.create(path.name, content)
    except BackendError as exc:
        return _fail(str(exc))
    finally:
        backend.close()
    print(share_url(backend.base_url, snippet.short_id) or snippet.short_id)
    return 0


def _add_client_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--remote",
        default=env("REMOTE_URL"),
        help="Remote sipp server URL (default: $SIPP_REMOTE_URL, else local database)",
    )
    parser.add_argument(
        "--api-key",
        default=env("API_KEY"),
        help="API key sent as x-api-key (default: $SIPP_API_KEY or saved config)",
    )
    parser.add_argument(
        "--db",
        default=env("DB_PATH", DEFAULT_DB_PATH),
        help=f"Local database file (default: $SIPP_DB_PATH or {DEFAULT_DB_PATH})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sipp", description="Personal snippet manager."
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        help="Telemetry preset (overrides SIPP_LOG_* variables)",
    )
    parser.set_defaults(
        handler=cmd_tui,
        remote=env("REMOTE_URL"),
        api_key=env("API_KEY"),
        db=env("DB_PATH", DEFAULT_DB_PATH),
    )
    subcommands = parser.add_subparsers(dest="command")

    tui = subcommands.add_parser("tui", help="Run the terminal client (default)")
    _add_client_options(tui)
    tui.set_defaults(handler=cmd_tui)

    serve = subcommands.add_parser("serve", help="Run the web/API server")
    serve.add_argument("--host", help="Bind address (default: $SIPP_HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Port (default: $SIPP_PORT or 3000)")
    serve.add_argument("--db", help="Database file (default: $SIPP_DB_PATH)")
    serve.set_defaults(handler=cmd_serve)

    auth = subcommands.add_parser(
        "auth", help=f"Save remote URL and API key to {config_path()}"
    )
    auth.set_defaults(handler=cmd_auth)

    upload = subcommands.add_parser("upload", help="Create a snippet from a file")
    upload.add_argument("file", help="File to upload; its basename becomes the name")
    _add_client_options(upload)
    upload.set_defaults(handler=cmd_upload)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    telemetry.record_event(
        "cli.start", data={"command": args.command or "tui"}, logger_name="sipp.cli"
    )
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
