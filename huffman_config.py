#!/usr/bin/env python3
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict
import yaml

from huffman_bits import BIT_ORDERS

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class BitsCfg:
    order: str = "msb"            # msb|lsb


@dataclass
class Paths:
    cipher_suffix: str = ".code"
    compressed_suffix: str = ".short"
    decoded_suffix: str = ".new"

    def cipher_path_for(self, src: str | Path) -> Path:
        return Path(src).with_suffix(self.cipher_suffix)

    def compressed_path_for(self, src: str | Path) -> Path:
        return Path(src).with_suffix(self.compressed_suffix)

    def decoded_path_for(self, src: str | Path) -> Path:
        return Path(src).with_suffix(self.decoded_suffix)


@dataclass
class LoggingCfg:
    level: str = "WARNING"


@dataclass
class Config:
    bits: BitsCfg = field(default_factory=BitsCfg)
    paths: Paths = field(default_factory=Paths)
    logging: LoggingCfg = field(default_factory=LoggingCfg)

    @staticmethod
    def default() -> "Config":
        return Config()

    # ---- loading & validation ----
    @staticmethod
    def load(path: str | Path) -> "Config":
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("Top-level YAML must be a mapping/object.")
        return Config.from_dict(data)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Config":
        for name in ("bits", "paths", "logging"):
            section = data.get(name)
            if section is not None and not isinstance(section, dict):
                raise ValueError(f"{name} must be a mapping.")
        cfg = Config(
            bits=Config._parse_bits(data.get("bits") or {}),
            paths=Config._parse_paths(data.get("paths") or {}),
            logging=Config._parse_logging(data.get("logging") or {}),
        )
        cfg._validate()
        return cfg

    @staticmethod
    def _parse_bits(d: Dict[str, Any]) -> BitsCfg:
        return BitsCfg(order=str(d.get("order", "msb")).lower())

    @staticmethod
    def _parse_paths(d: Dict[str, Any]) -> Paths:
        return Paths(
            cipher_suffix=str(d.get("cipher_suffix", ".code")),
            compressed_suffix=str(d.get("compressed_suffix", ".short")),
            decoded_suffix=str(d.get("decoded_suffix", ".new")),
        )

    @staticmethod
    def _parse_logging(d: Dict[str, Any]) -> LoggingCfg:
        return LoggingCfg(level=str(d.get("level", "WARNING")).upper())

    def _validate(self) -> None:
        if self.bits.order not in BIT_ORDERS:
            raise ValueError(f"bits.order must be one of {BIT_ORDERS}.")
        for name in ("cipher_suffix", "compressed_suffix", "decoded_suffix"):
            suffix = getattr(self.paths, name)
            if not suffix.startswith(".") or len(suffix) < 2:
                raise ValueError(f"paths.{name} must look like '.ext'.")
        suffixes = {self.paths.cipher_suffix, self.paths.compressed_suffix, self.paths.decoded_suffix}
        if len(suffixes) != 3:
            raise ValueError("paths suffixes must be distinct.")
        if self.logging.level not in _VALID_LEVELS:
            raise ValueError(f"logging.level must be one of {sorted(_VALID_LEVELS)}.")
