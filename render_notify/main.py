"""Command-line entry point for sending a render notification."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import requests

from render_notify.config.environment import load_environment_config
from render_notify.config.exceptions import ConfigurationError
from render_notify.config.loader import load_job_file
from render_notify.domain.models import EventType, JobAction
from render_notify.logging import get_logger
from render_notify.logging.config import configure_logging
from render_notify.notifications.models import NotificationError
from render_notify.notifications.service import TelegramNotifier
from render_notify.notifications.telegram_client import TelegramClient, redact_token

logger = get_logger(__name__, component="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="render-notify",
        description="Send a Telegram notification for a render job lifecycle event",
    )
    parser.add_argument(
        "--job",
        type=Path,
        required=True,
        help="Path to the job descriptor (JSON or YAML)",
    )
    parser.add_argument(
        "--event",
        required=True,
        help=(
            "Lifecycle event: "
            + ", ".join(e.value for e in EventType)
            + " (other values produce a generic update)"
        ),
    )
    parser.add_argument(
        "--text",
        default=None,
        help="Extra text appended to the message (overrides the job's action text)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides LOG_LEVEL)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Send one notification and report the outcome.

    Returns:
        Exit code: 0 when delivered, 1 on any failure
        (argparse exits with 2 on usage errors).
    """
    args = build_parser().parse_args(argv)

    try:
        env_config = load_environment_config()
        if args.log_level:
            env_config.log_level = args.log_level

        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        job = load_job_file(args.job)
        if args.text is not None:
            action = job.action or JobAction()
            job = job.model_copy(update={"action": action.model_copy(update={"text": args.text})})

        notifier = TelegramNotifier(
            credentials=env_config.credentials,
            client=TelegramClient(
                api_base_url=env_config.api_base_url,
                timeout=env_config.timeout,
            ),
        )
        notifier.notify(job, None, args.event)
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except NotificationError as e:
        print(f"Notification Error: {redact_token(str(e), env_config.bot_token)}", file=sys.stderr)
        return 1
    except requests.exceptions.RequestException as e:
        print(f"Transport Error: {redact_token(str(e), env_config.bot_token)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
