#!/usr/bin/env python3
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from huffman_config import Config
from huffman_core import frequencies_from_counts
from huffman_errors import HuffmanError
from huffman_service import HuffmanService


def _symbol_label(symbol: int) -> str:
    ch = chr(symbol)
    return repr(ch) if ch.isprintable() else f"0x{symbol:02x}"


def cmd_compress(service: HuffmanService, args: argparse.Namespace) -> int:
    code_path, short_path = service.compress_file(args.input, args.output)
    original = Path(args.input).stat().st_size
    packed = code_path.stat().st_size + short_path.stat().st_size
    print(f"Cipher: {code_path}")
    print(f"Compressed: {short_path}")
    if original:
        print(f"{packed * 100 / original:.2f}% of original ({packed} of {original} bytes)")
    return 0


def cmd_decompress(service: HuffmanService, args: argparse.Namespace) -> int:
    dst = service.decompress_file(args.code, args.short, args.output)
    print(f"Decoded: {dst}")
    return 0


def cmd_show_codes(service: HuffmanService, args: argparse.Namespace) -> int:
    data = Path(args.input).read_bytes()
    codes = service.build_codes(data)
    if not codes:
        print("Input is empty; nothing to code.")
        return 0
    dense = [0] * 256
    for b in data:
        dense[b] += 1
    counts = frequencies_from_counts(dense)
    for symbol in sorted(codes, key=lambda s: (len(codes[s]), s)):
        print(f"{_symbol_label(symbol):>8} {counts[symbol]:>10} {codes[symbol]}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Huffman compression with a portable text cipher.")
    parser.add_argument("--config", help="YAML configuration file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compress", help="Write <stem>.code and <stem>.short for a file.")
    p.add_argument("input", help="File to compress.")
    p.add_argument("-o", "--output", help="Output stem (defaults to the input path).")
    p.set_defaults(func=cmd_compress)

    p = sub.add_parser("decompress", help="Rebuild a file from its cipher and compressed bits.")
    p.add_argument("code", help="Cipher (.code) file.")
    p.add_argument("short", help="Compressed (.short) file.")
    p.add_argument("-o", "--output", help="Decoded file (defaults to <short stem>.new).")
    p.set_defaults(func=cmd_decompress)

    p = sub.add_parser("show-codes", help="Print the codeword of every byte in a file.")
    p.add_argument("input", help="File to analyse.")
    p.set_defaults(func=cmd_show_codes)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = Config.load(args.config) if args.config else Config.default()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else cfg.logging.level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(HuffmanService(cfg), args)
    except (HuffmanError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
