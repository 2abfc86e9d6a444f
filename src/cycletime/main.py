"""Application entry point and orchestration for PR cycle-time metrics."""

from __future__ import annotations

import logging
import sys

from .cli import parse_args
from .config import load_config
from .errors import ConfigurationError, DataValidationError, InputError
from .kpi import collect_key_metrics
from .payload import load_pull_requests
from .stats import generate_json_report, generate_report

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2
EXIT_INPUT_ERROR = 3
EXIT_DATA_VALIDATION_ERROR = 4


def orchestrate_metrics_generation() -> int:
    """Run the metrics pipeline and map failures to process exit codes.

    Returns:
        ``0`` on success, otherwise a category-specific non-zero exit code.
    """
    try:
        args = parse_args()
        config = load_config(
            input_paths=args.inputs,
            output_format=args.format,
            log_level=args.log_level,
        )
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        print(f"Reading {len(config.input_paths)} pull request export(s)...", file=sys.stderr)
        pull_requests = load_pull_requests(config.input_paths)
        key_metrics = collect_key_metrics(pull_requests)

        if config.output_format == "json":
            print(generate_json_report(key_metrics))
        else:
            print(generate_report(key_metrics))
        return EXIT_SUCCESS
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR
    except InputError as exc:
        logger.error("Input error: %s", exc)
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except DataValidationError as exc:
        logger.error("Data validation error: %s", exc)
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_DATA_VALIDATION_ERROR
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected failure while generating metrics")
        print(f"ERROR: Unexpected failure: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR


def main() -> None:
    """Console script entry point."""
    sys.exit(orchestrate_metrics_generation())


if __name__ == "__main__":
    main()
