"""Command line interface for a sharefs store."""

import argparse
import logging
import os
import sys

import fs as pyfs
import fs.errors

from . import config
from .errors import ShareFSError
from .serving import serve
from .upload import Field, build_from_fields

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharefs", description="Store and retrieve shared files.")
    parser.add_argument(
        "--root",
        help="storage root (default: ${0})".format(config.LOCATION_ENV))
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug output")
    commands = parser.add_subparsers(dest="command", required=True)

    put = commands.add_parser("put", help="store a file, print its code")
    put.add_argument("path", help="file to store")
    put.add_argument("--name", help="display name (default: file basename)")
    put.add_argument("--public", action="store_true")
    put.add_argument("--protected", action="store_true")
    put.add_argument("--no-preview", action="store_true")
    put.add_argument("--language", help="highlight text as this language")

    get = commands.add_parser("get", help="write a stored file's content")
    get.add_argument("code")
    get.add_argument("--secret", help="secret of a protected file")
    get.add_argument("--raw", action="store_true",
                     help="do not syntax highlight code")
    get.add_argument("-o", "--output", help="write here instead of stdout")

    info = commands.add_parser("info", help="show a stored file's header")
    info.add_argument("code")

    return parser


def _load_config(args) -> config.Config:
    environ = dict(os.environ)
    if args.root:
        environ[config.LOCATION_ENV] = args.root
    return config.from_env(environ)


def _is_text(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def cmd_put(cfg: config.Config, args) -> int:
    with open(args.path, "rb") as fileobj:
        data = fileobj.read()

    fields = [Field("file", data,
                    filename=args.name or os.path.basename(args.path),
                    is_text=_is_text(data))]
    for flag in ("public", "protected", "no_preview"):
        if getattr(args, flag):
            fields.append(Field(flag, b""))
    if args.language:
        fields.append(Field("language", args.language))

    obj = build_from_fields(cfg.store(), fields)
    print(cfg.link(obj.address))
    if obj.secret is not None:
        print("secret: {0}".format(obj.secret))
    return 0


def cmd_get(cfg: config.Config, args) -> int:
    highlighter = None if args.raw else cfg.highlighter()
    served = serve(cfg.store(), args.code, secret=args.secret, raw=args.raw,
                   highlighter=highlighter)
    if args.output:
        with open(args.output, "wb") as fileobj:
            fileobj.write(served.body)
    else:
        sys.stdout.buffer.write(served.body)
        sys.stdout.flush()
    return 0


def cmd_info(cfg: config.Config, args) -> int:
    obj = cfg.store().open(args.code, header_only=True)
    print("name: {0}".format(obj.name))
    print("kind: {0!r}".format(obj.kind))
    print("public: {0}".format(obj.flags.public))
    print("protected: {0}".format(obj.flags.protected))
    print("no_preview: {0}".format(obj.flags.no_preview))
    return 0


COMMANDS = {"put": cmd_put, "get": cmd_get, "info": cmd_info}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        cfg = _load_config(args)
        return COMMANDS[args.command](cfg, args)
    except (ShareFSError, pyfs.errors.FSError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print("sharefs: {0}".format(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
