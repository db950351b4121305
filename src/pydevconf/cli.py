from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .errors import ConfigSaveError, DevConfError
from .model import is_comment
from .paths import default_store_path
from .store import ConfigStore
from .values import format_bool, parse_bool, parse_int

TYPES = ("string", "int", "uint16", "uint64", "bool")


def _store_path(args: argparse.Namespace) -> Path:
    return Path(args.file) if args.file else default_store_path()


def _open_store(args: argparse.Namespace) -> ConfigStore:
    path = _store_path(args)
    if not path.exists():
        return ConfigStore.new_empty()
    return ConfigStore.load(path)


def _commit(args: argparse.Namespace, store: ConfigStore) -> None:
    path = _store_path(args)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigSaveError(f"unable to create {path.parent}: {exc}") from exc
    store.save(path, sync=not args.no_sync)


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger("pydevconf")
    if verbose and not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def path_cmd(args: argparse.Namespace) -> int:
    print(str(_store_path(args)))
    return 0


def sections_cmd(args: argparse.Namespace) -> int:
    store = _open_store(args)
    for name in store:
        if is_comment(name) and not args.comments:
            continue
        print(name)
    return 0


def get_cmd(args: argparse.Namespace) -> int:
    store = _open_store(args)
    if not store.has_key(args.section, args.key):
        if args.default is None:
            return 1
        print(args.default)
        return 0
    if args.type == "string":
        val = store.get_string(args.section, args.key)
    elif args.type == "bool":
        val = store.get_bool(args.section, args.key, None)
        val = None if val is None else format_bool(val)
    else:
        getter = getattr(store, f"get_{args.type}")
        val = getter(args.section, args.key, None)
    if val is None:
        if args.default is None:
            print(f"[{args.section}] {args.key} is not a valid {args.type}", file=sys.stderr)
            return 1
        val = args.default
    print(val)
    return 0


def set_cmd(args: argparse.Namespace) -> int:
    store = _open_store(args)
    try:
        if args.type == "string":
            store.set_string(args.section, args.key, args.value)
        elif args.type == "bool":
            flag = parse_bool(args.value)
            if flag is None:
                raise ValueError(f"invalid bool {args.value!r}")
            store.set_bool(args.section, args.key, flag)
        else:
            number = parse_int(args.value)
            if number is None:
                raise ValueError(f"invalid {args.type} {args.value!r}")
            getattr(store, f"set_{args.type}")(args.section, args.key, number)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    _commit(args, store)
    return 0


def unset_cmd(args: argparse.Namespace) -> int:
    store = _open_store(args)
    if not store.remove_key(args.section, args.key):
        return 1
    _commit(args, store)
    return 0


def drop_cmd(args: argparse.Namespace) -> int:
    store = _open_store(args)
    if not store.remove_section(args.section):
        return 1
    _commit(args, store)
    return 0


def dump_cmd(args: argparse.Namespace) -> int:
    store = _open_store(args)
    if args.sort:
        store.sort_entries()
    text = store.dumps()
    if text:
        print(text.rstrip("\n"))
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog or "pydevconf",
        description="Inspect and edit a pydevconf key/value store.",
    )
    parser.add_argument("--file", help="Store file (default: user config dir)")
    parser.add_argument("--no-sync", action="store_true", help="Skip the full filesystem sync after saving")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")
    subparsers = parser.add_subparsers(dest="cmd")

    p_path = subparsers.add_parser("path", help="Print the store file path.")
    p_path.set_defaults(func=path_cmd)

    p_sections = subparsers.add_parser("sections", help="List section names.")
    p_sections.add_argument("--comments", action="store_true", help="Include comment lines")
    p_sections.set_defaults(func=sections_cmd)

    p_get = subparsers.add_parser("get", help="Print the value of KEY in SECTION.")
    p_get.add_argument("section")
    p_get.add_argument("key")
    p_get.add_argument("--type", choices=TYPES, default="string")
    p_get.add_argument("--default")
    p_get.set_defaults(func=get_cmd)

    p_set = subparsers.add_parser("set", help="Set KEY in SECTION to VALUE.")
    p_set.add_argument("section")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.add_argument("--type", choices=TYPES, default="string")
    p_set.set_defaults(func=set_cmd)

    p_unset = subparsers.add_parser("unset", help="Remove KEY from SECTION.")
    p_unset.add_argument("section")
    p_unset.add_argument("key")
    p_unset.set_defaults(func=unset_cmd)

    p_drop = subparsers.add_parser("drop", help="Remove SECTION and all of its keys.")
    p_drop.add_argument("section")
    p_drop.set_defaults(func=drop_cmd)

    p_dump = subparsers.add_parser("dump", help="Print the store in file format.")
    p_dump.add_argument("--sort", action="store_true", help="Sort keys within each section")
    p_dump.set_defaults(func=dump_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    _configure_logging(args.verbose)
    try:
        return int(func(args))
    except DevConfError as exc:
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
