"""
paas-deploy - CLI entry point.

Reads a deployment payload (JSON), builds the provider pipeline for it and
runs execute() followed by notify(). This is the outer caller of the
pipeline: it is the only place that catches deployment errors and turns
them into an exit code.

Examples:
    paas-deploy --payload deployment.json
    paas-deploy --payload deployment.json --dry-run --debug
    paas-deploy --list-providers
"""

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Optional, Sequence

from paas_deployer import constants as CONSTANTS
from paas_deployer import logger as log_module
from paas_deployer.config import get_settings
from paas_deployer.core.exceptions import ConfigurationError, DeploymentError
from paas_deployer.core.models import DeploymentRequest
from paas_deployer.core.registry import ProviderRegistry
from paas_deployer.logger import logger, print_stack_trace
import paas_deployer.providers  # noqa: F401  (registers providers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paas-deploy",
        description="Deploy a commit to a PaaS environment",
    )
    parser.add_argument("--provider", default=CONSTANTS.BEANSTALK_PROVIDER_NAME,
                        help="Provider name (default: %(default)s)")
    parser.add_argument("--payload", type=Path, help="Path to the deployment payload JSON")
    parser.add_argument("--id", dest="identifier", help="Deployment id (default: random)")
    parser.add_argument("--dry-run", action="store_true", help="Validate wiring without remote calls")
    parser.add_argument("--debug", action="store_true", help="Verbose logging with stack traces")
    parser.add_argument("--list-providers", action="store_true", help="List available providers and exit")
    return parser


def load_payload(path: Path) -> dict:
    """
    Raises:
        ConfigurationError: If the file is missing or not valid JSON
    """
    if not path.exists():
        raise ConfigurationError("Payload file not found", source=str(path))
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in payload: {e}", source=str(path))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_providers:
        for name in ProviderRegistry.list_providers():
            print(name)
        return 0

    if args.payload is None:
        print("error: --payload is required", file=sys.stderr)
        return 2

    settings = get_settings()
    log_module.set_debug_mode(args.debug or settings.DEBUG)

    provider = None
    try:
        request = DeploymentRequest.from_payload(
            args.identifier or uuid.uuid4().hex, load_payload(args.payload)
        )
        provider = ProviderRegistry.create(args.provider, request, settings, dry_run=args.dry_run)
        provider.execute()
        provider.notify()
    except DeploymentError as e:
        logger.error(str(e))
        print_stack_trace()
        if provider is not None:
            provider.status.fail()
            for line in provider.status.log:
                print(line, file=sys.stderr)
        return 1

    if provider.status.output:
        print(provider.status.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
