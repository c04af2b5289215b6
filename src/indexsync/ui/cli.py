# ruff: noqa: T201

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from indexsync.app import plan_notifications, reconcile_notifications
from indexsync.config import configure_logging, get_service_config
from indexsync.web.ingress import ParamsRejection, parse_webhook_body, parse_webhook_params

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from indexsync.web.ingress import WebhookParams

log = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
_OPTION_FOR_PARAM = {"slug": "--slug", "appId": "--app-id", "index": "--index"}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep an Algolia index in sync with Kontent.ai")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the webhook server")
    serve.add_argument("--host", type=str, default=DEFAULT_HOST, help="Bind address")
    serve.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port")

    replay = subparsers.add_parser("replay", help="Reconcile a stored webhook payload")
    replay.add_argument("payload", type=Path, help="Path to a webhook JSON body")
    replay.add_argument("--slug", type=str, help="Element codename holding the URL slug")
    replay.add_argument("--app-id", type=str, help="Algolia application id")
    replay.add_argument("--index", type=str, help="Algolia index name")
    replay.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the planned mutations without writing to the index",
    )

    return parser.parse_args(list(argv))


def _replay_params(args: argparse.Namespace) -> WebhookParams:
    params = parse_webhook_params(
        {
            "slug": args.slug or "",
            "appId": args.app_id or "",
            "index": args.index or "",
        }
    )
    if isinstance(params, ParamsRejection):
        options = ", ".join(_OPTION_FOR_PARAM[name] for name in params.missing)
        raise ValueError(f"Missing replay options: {options}")
    return params


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    from indexsync.web.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def _replay(args: argparse.Namespace, params: WebhookParams) -> None:
    notifications = parse_webhook_body(args.payload.read_bytes())
    config = get_service_config()
    if args.dry_run:
        mutations = asyncio.run(plan_notifications(notifications, params, config=config))
        print(json.dumps(mutations.as_payload(), indent=2))
        return
    summary = asyncio.run(reconcile_notifications(notifications, params, config=config))
    print(json.dumps(summary.as_payload(), indent=2))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    params: WebhookParams | None = None
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "replay":
            params = _replay_params(parsed_args)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.debug else logging.INFO)

    try:
        if parsed_args.command == "serve":
            _serve(parsed_args)
        elif parsed_args.command == "replay" and params is not None:
            _replay(parsed_args, params)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
