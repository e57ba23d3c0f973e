import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from alioss.config import load_settings
from alioss.exceptions import ConfigurationError, OssError
from alioss.logger import LogFormat, init_logger, logger
from alioss.oss import AliOssClient, generate_object_id, strip_prefix
from alioss.toolkit.json import orjson_dumps
from alioss.toolkit.timer import format_unix_timestamp

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def build_client(config_path: str | None) -> AliOssClient:
    """按 --config 创建客户端，未指定时完全从环境变量 (ALIOSS_*) 读取"""
    return AliOssClient(load_settings(Path(config_path) if config_path else None))


def _cmd_genid(args: argparse.Namespace) -> int:
    print(generate_object_id(args.prefix, args.suffix))
    return 0


def _cmd_put(args: argparse.Namespace) -> int:
    client = build_client(args.config)
    if args.file == "-":
        client.put_object(args.bucket, args.object_id, sys.stdin.buffer)
    else:
        with open(args.file, "rb") as f:
            client.put_object(args.bucket, args.object_id, f)
    print(strip_prefix(args.object_id))
    return 0


def _cmd_sign(args: argparse.Namespace) -> int:
    client = build_client(args.config)
    print(client.get_sign_url(args.bucket, args.object_id, expires=args.expires))
    return 0


def _cmd_ls(args: argparse.Namespace) -> int:
    client = build_client(args.config)
    result = client.list_objects(args.bucket, prefix=args.prefix, max_keys=args.max_keys)
    for obj in result.object_list:
        if args.json:
            print(
                orjson_dumps(
                    {
                        "key": obj.key,
                        "size": obj.size,
                        "last_modified": format_unix_timestamp(obj.last_modified),
                        "etag": obj.etag,
                    }
                )
            )
        else:
            print(f"{obj.key}\t{obj.size}\t{format_unix_timestamp(obj.last_modified)}")
    if result.is_truncated:
        logger.info(f"Listing truncated, next marker: {result.next_marker}")
    return 0


def _cmd_rm(args: argparse.Namespace) -> int:
    client = build_client(args.config)
    client.delete_object(args.bucket, args.object_id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="alioss", description="Aliyun OSS command line client")
    parser.add_argument("--config", help="config file (json / yaml / toml), environment ALIOSS_* used when omitted")
    parser.add_argument(
        "--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS, help="log level (default: WARNING)"
    )
    parser.add_argument(
        "--log-format", default=LogFormat.TEXT, choices=[f.value for f in LogFormat], help="log format"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("genid", help="generate a new object id")
    p.add_argument("prefix", help="path prefix, e.g. images/avatar")
    p.add_argument("--suffix", default="", help="file suffix, e.g. png")
    p.set_defaults(func=_cmd_genid)

    p = sub.add_parser("put", help="upload a file")
    p.add_argument("bucket")
    p.add_argument("object_id")
    p.add_argument("file", help="local file, '-' for stdin")
    p.set_defaults(func=_cmd_put)

    p = sub.add_parser("sign", help="print a signed download url")
    p.add_argument("bucket")
    p.add_argument("object_id")
    p.add_argument("--expires", type=int, default=None, help="seconds, default from config")
    p.set_defaults(func=_cmd_sign)

    p = sub.add_parser("ls", help="list objects (one page)")
    p.add_argument("bucket")
    p.add_argument("--prefix", default="")
    p.add_argument("--max-keys", type=int, default=100)
    p.add_argument("--json", action="store_true", help="print JSON lines")
    p.set_defaults(func=_cmd_ls)

    p = sub.add_parser("rm", help="delete an object")
    p.add_argument("bucket")
    p.add_argument("object_id")
    p.set_defaults(func=_cmd_rm)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_logger(level=args.log_level, log_format=args.log_format)

    try:
        return args.func(args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except OssError as e:
        logger.error(f"OSS error: status={e.status}, code={e.code}, request_id={e.request_id}, message={e.message}")
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
