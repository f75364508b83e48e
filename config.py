import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

ENV_PREFIX = "SCANIFY_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class ScannerConfig:
    max_upload_side: int = 2048
    corner_inset: float = 0.2
    strict_geometry: bool = True
    jpeg_quality: int = 95
    output_format: str = "JPEG"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_upload_side < 1:
            raise ValueError("max_upload_side must be positive")
        if not 0.0 <= self.corner_inset < 0.5:
            raise ValueError("corner_inset must be in [0, 0.5)")
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError("jpeg_quality must be in [1, 100]")
        self.output_format = self.output_format.upper()
        if self.output_format not in ("JPEG", "PNG"):
            raise ValueError(f"Unsupported output_format {self.output_format!r}")


def _parse_bool(raw):
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Not a boolean: {raw!r}")


_PARSERS = {int: int, float: float, bool: _parse_bool, str: str}


def load_config_from_file(path) -> ScannerConfig:
    data = json.loads(Path(path).read_text())
    return ScannerConfig(**data)


def load_config_from_env(environ=None) -> ScannerConfig:
    environ = os.environ if environ is None else environ

    raw = environ.get(ENV_PREFIX + "CONFIG_JSON")
    if raw:
        try:
            return ScannerConfig(**json.loads(raw))
        except TypeError as e:
            raise ValueError(f"Invalid {ENV_PREFIX}CONFIG_JSON: {e}") from e

    values = {}
    for field in fields(ScannerConfig):
        key = ENV_PREFIX + field.name.upper()
        if key in environ:
            values[field.name] = _PARSERS[field.type](environ[key])
    return ScannerConfig(**values)


def configure_logging(level="INFO"):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
