"""CLI entry point for versionkeeper: inspect and apply versioning decisions."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from versionkeeper import metrics
from versionkeeper.config import VersionKeeperConfig, load_config
from versionkeeper.errors import NoSuchKey, S3Error
from versionkeeper.logging_config import configure_logging
from versionkeeper.metadata import create_metadata_store
from versionkeeper.version_id import HexVersionIdCodec, VersionIdDecodeError
from versionkeeper.versioning import (
    decode_vid,
    get_master_state,
    preprocess_versioning_delete,
    process_versioning_state,
    versioning_preprocessing,
)
from versionkeeper.versioning.models import PutOptions, VersioningDecision

logger = logging.getLogger("versionkeeper")

_STATUSES = {"none": None, "Enabled": "Enabled", "Suspended": "Suspended"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="versionkeeper",
        description="versionkeeper - S3 versioning decision inspector",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Path to YAML configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--log-level", type=str, default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--log-format", type=str, default=None, choices=["text", "json"],
        help="Log format: 'text' (human-readable) or 'json' (structured)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    put_parser = subparsers.add_parser("put", help="Show the PUT versioning decision")
    put_parser.add_argument("--status", choices=sorted(_STATUSES), default="none")
    put_parser.add_argument(
        "--record", type=str, default="-",
        help="JSON file with the current master record, or '-' for stdin (JSON null: no record)",
    )

    delete_parser = subparsers.add_parser("delete", help="Show the DELETE versioning decision")
    delete_parser.add_argument("--status", choices=sorted(_STATUSES), default="none")
    delete_parser.add_argument(
        "--record", type=str, default="-",
        help="JSON file with the current master record, or '-' for stdin",
    )
    delete_parser.add_argument(
        "--version-id", type=str, default=None,
        help="Public version id from the request, or 'null'",
    )

    preprocess_parser = subparsers.add_parser(
        "preprocess",
        help="Apply PUT versioning preprocessing to the configured metadata store",
    )
    preprocess_parser.add_argument("--bucket", required=True)
    preprocess_parser.add_argument("--key", required=True)
    preprocess_parser.add_argument("--status", choices=sorted(_STATUSES), default="none")

    encode_parser = subparsers.add_parser("encode", help="Encode an internal version id")
    encode_parser.add_argument("version_id")

    decode_parser = subparsers.add_parser("decode", help="Decode a public version id")
    decode_parser.add_argument("version_id")

    return parser.parse_args(argv)


def _read_record(source: str) -> dict[str, Any] | None:
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    if not text.strip():
        return None
    return json.loads(text)


def _put_decision(config: VersionKeeperConfig, codec: HexVersionIdCodec, args) -> dict[str, Any]:
    mst = get_master_state(_read_record(args.record))
    status = _STATUSES[args.status]
    if status is None:
        decision = VersioningDecision(options=PutOptions(data_to_delete=mst.obj_location))
    else:
        sentinel = codec.reserved_infinite_id(config.versioning.replication_group_id)
        decision = process_versioning_state(mst, status, sentinel)
    return decision.to_dict()


def _delete_decision(codec: HexVersionIdCodec, args) -> dict[str, Any]:
    record = _read_record(args.record)
    version_id = decode_vid(args.version_id, codec) if args.version_id else None
    return preprocess_versioning_delete(_STATUSES[args.status], record, version_id).to_dict()


async def _preprocess(config: VersionKeeperConfig, codec: HexVersionIdCodec, args) -> dict[str, Any]:
    store = create_metadata_store(config.metadata, codec)
    await store.init_db()
    try:
        try:
            record = await store.get_object(args.bucket, args.key)
        except NoSuchKey:
            record = None
        options = await versioning_preprocessing(
            args.bucket,
            _STATUSES[args.status],
            args.key,
            record,
            store,
            codec,
            config.versioning.replication_group_id,
        )
    finally:
        await store.close()
    return options.to_dict()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    config = VersionKeeperConfig()
    if args.config is not None:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            logger.error("Config file not found: %s", args.config)
            return 1
        except Exception as exc:
            logger.error("Failed to load config: %s", exc)
            return 1

    if args.log_level is not None:
        config.logging.level = args.log_level
    if args.log_format is not None:
        config.logging.format = args.log_format
    configure_logging(level=config.logging.level, fmt=config.logging.format)

    if config.observability.metrics:
        metrics.init_metrics()

    codec = HexVersionIdCodec(config.versioning.replication_group_id)

    try:
        if args.command == "put":
            output: Any = _put_decision(config, codec, args)
        elif args.command == "delete":
            output = _delete_decision(codec, args)
        elif args.command == "preprocess":
            output = asyncio.run(_preprocess(config, codec, args))
        elif args.command == "encode":
            output = codec.encode(args.version_id)
        else:
            try:
                output = codec.decode(args.version_id)
            except VersionIdDecodeError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 2
    except S3Error as exc:
        print(f"Error: {exc.code}: {exc.message}", file=sys.stderr)
        return 2
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error reading record: {exc}", file=sys.stderr)
        return 1

    if isinstance(output, str):
        print(output)
    else:
        print(json.dumps(output, indent=2, sort_keys=True))
    return 0


def entry_point() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
