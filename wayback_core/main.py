"""World Imagery Wayback local changes command-line entry point.

Prints, as JSON, the wayback releases in which the imagery at a point changed.
"""

import argparse
import json
import sys
from typing import Optional

from pydantic import ValidationError

from .config import ConfigLoader
from .exceptions import WaybackBaseException
from .local_changes import LocalChangesService
from .utils import setup_logging, get_logger, zoom_to_level


def main(args: Optional[list] = None) -> int:
    """Main entry point for the wayback-changes command.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="World Imagery Wayback - list releases with local changes at a point"
    )
    parser.add_argument("--longitude", type=float, required=True, help="Longitude in degrees")
    parser.add_argument("--latitude", type=float, required=True, help="Latitude in degrees")
    parser.add_argument("--zoom", type=float, required=True, help="Map zoom level")
    parser.add_argument(
        "--environment",
        choices=["production", "development"],
        default=None,
        help="Wayback services to use (default: $WAYBACK_ENVIRONMENT or production)"
    )
    parser.add_argument("--config-dir", default=None, help="Directory holding environment_config.json")
    parser.add_argument("--config-file-url", default=None, help="Custom wayback configuration file URL")
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Include imagery metadata of every returned release"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip releases whose tile image cannot be downloaded instead of failing"
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--log-dir", default=None, help="Also write a rotating log file to this directory")

    parsed_args = parser.parse_args(args)

    setup_logging(
        environment=parsed_args.environment or "development",
        log_level=parsed_args.log_level,
        log_dir=parsed_args.log_dir
    )
    logger = get_logger(__name__)

    try:
        overrides = {"custom_config_file_url": parsed_args.config_file_url}
        if parsed_args.lenient:
            overrides["strict_image_fetch"] = False

        settings = ConfigLoader(parsed_args.config_dir).get_settings(
            parsed_args.environment, **overrides
        )
        service = LocalChangesService.from_settings(settings)
        point = {"longitude": parsed_args.longitude, "latitude": parsed_args.latitude}

        releases = service.resolve_changed_releases(point, parsed_args.zoom)
        output = [release.to_dict() for release in releases]

        if parsed_args.metadata:
            from .metadata import MetadataQueryService

            metadata_service = MetadataQueryService(service.release_index)
            level = zoom_to_level(parsed_args.zoom)
            for entry in output:
                metadata = metadata_service.get_metadata(point, level, entry["releaseNum"])
                entry["metadata"] = metadata.model_dump() if metadata else None

    except WaybackBaseException as e:
        logger.error(f"Query failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValidationError, ValueError) as e:
        # out-of-range coordinates or a zoom level the services cannot serve
        logger.error(f"Invalid query arguments: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
