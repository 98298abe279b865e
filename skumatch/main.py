"""Main entry point for the bulk SKU matcher."""

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from skumatch.catalog import CatalogUnavailableError, build_provider
from skumatch.config.environment import EnvironmentConfig
from skumatch.config.exceptions import ConfigurationError
from skumatch.config.loader import load_config
from skumatch.config.models import STATUS_FILTERS, AppConfig, ExportFormat
from skumatch.logging import get_logger
from skumatch.logging.config import configure_logging
from skumatch.matching import SkuMatcher, format_summary_text, write_export
from skumatch.matching.exceptions import InvalidInputError
from skumatch.parsing import ParsedSkuInput, parse_sku_input

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_BATCH_ERROR = 2
EXIT_INTERRUPTED = 130


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Without an explicit --config the default locations are searched and
    built-in defaults are used if none exists.

    Args:
        config_path: Path to configuration file, or None
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with the effective log level

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path, allow_missing=config_path is None)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def read_sku_input(input_path: Optional[str], skus: Sequence[str]) -> ParsedSkuInput:
    """
    Collect SKU text from --input and positional arguments, then parse it.

    Args:
        input_path: File to read, "-" for stdin, or None
        skus: SKUs given on the command line

    Returns:
        ParsedSkuInput for the combined text

    Raises:
        InvalidInputError: If the input file cannot be read
    """
    chunks: List[str] = []

    if input_path == "-":
        chunks.append(sys.stdin.read())
    elif input_path:
        try:
            chunks.append(Path(input_path).read_text(encoding="utf-8"))
        except OSError as e:
            raise InvalidInputError(f"Cannot read SKU input file {input_path}: {e}") from e

    chunks.extend(skus)
    return parse_sku_input("\n".join(chunk for chunk in chunks if chunk.strip()))


def _log_progress(percent: float) -> None:
    logger.debug(f"Progress {percent:.0f}%", extra={"event": "batch.progress", "percent": percent})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skumatch",
        description="Bulk SKU matcher - classify SKU queries against a product catalog",
    )
    parser.add_argument("skus", nargs="*", help="SKUs to search for")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: skumatch.yaml or config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="Queries per chunk (overrides matching.chunk_size)",
    )
    parser.add_argument(
        "--input",
        dest="input_path",
        default=None,
        help="File with SKUs (one per line, comma or space separated); '-' reads stdin",
    )
    parser.add_argument(
        "--export",
        type=Path,
        default=None,
        help="Write results to this file (or directory, using the default file name)",
    )
    parser.add_argument(
        "--format",
        dest="export_format",
        choices=[f.value for f in ExportFormat],
        default=None,
        help="Export format (overrides export.format)",
    )
    parser.add_argument(
        "--status-filter",
        choices=list(STATUS_FILTERS),
        default=None,
        help="Only export results with this status (overrides export.status_filter)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the SKU matcher.

    Returns:
        Exit code: 0 success, 1 configuration error, 2 catalog unavailable or
        invalid input, 130 when interrupted
    """
    load_dotenv()
    start_time = time.time()
    args = build_parser().parse_args(argv)
    provider = None

    try:
        # Step 1: Load configuration early (before logging for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        # Step 2: Configure logging
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        chunk_size = args.chunk_size if args.chunk_size is not None else app_config.matching.chunk_size
        logger.info(
            "SKU matcher starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "catalog_type": app_config.catalog.type,
                "chunk_size": chunk_size,
            },
        )

        # Step 3: Parse SKU input
        parsed = read_sku_input(args.input_path, args.skus)
        for warning in parsed.warnings:
            logger.warning(warning, extra={"event": "input.warning"})
        if not parsed.skus:
            print("No valid SKUs to search", file=sys.stderr)
            return EXIT_BATCH_ERROR

        # Step 4: Match against the configured catalog
        provider = build_provider(app_config.catalog, env_config)
        matcher = SkuMatcher(rules=app_config.matching.scoring)
        summary = asyncio.run(
            matcher.match_batch(
                parsed.skus, provider, chunk_size=chunk_size, on_progress=_log_progress
            )
        )

        print(format_summary_text(summary))

        # Step 5: Optional export
        if args.export:
            write_export(
                summary,
                args.export,
                fmt=args.export_format or app_config.export.format,
                fields=app_config.export.fields,
                status_filter=args.status_filter or app_config.export.status_filter,
            )

        logger.info(
            "SKU matcher finished",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return EXIT_OK

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except CatalogUnavailableError as e:
        print(f"Catalog unavailable: {e}", file=sys.stderr)
        return EXIT_BATCH_ERROR
    except InvalidInputError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_BATCH_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return EXIT_CONFIG_ERROR
    finally:
        if provider is not None:
            provider.close()


if __name__ == "__main__":
    sys.exit(main())
