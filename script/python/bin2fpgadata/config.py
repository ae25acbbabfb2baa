#!/usr/bin/env python3
"""
bin2fpgadata — Configuration Manager

Dönüştürücünün tek seferlik okunan konfigürasyon kaydı (ConverterConfig) ve
isteğe bağlı JSON konfigürasyon dosyası katmanı.

Öncelik sırası: CLI > JSON profil > JSON (local override dahil) > varsayılan

Kullanım:
    from bin2fpgadata.config import load_config, ConverterConfig

    json_config = load_config(profile="axi_256")
    print(json_config.convert["burst"])
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

MAX_BURST_LENGTH = 0x400
BURST_ALIGN = 0x10
MAX_UINT32 = 0xFFFFFFFF

CONFIG_FILE_NAME = "bin2fpgadata.json"
LOCAL_CONFIG_FILE_NAME = "bin2fpgadata.local.json"


class ConfigError(ValueError):
    """Geçersiz konfigürasyon (fatal, çıktı üretilmez)."""


# ═══════════════════════════════════════════════════════════════════════════
# Converter Configuration
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class ConverterConfig:
    burst_length: int = MAX_BURST_LENGTH
    offset: int = 0
    hole_begin: int = 0
    hole_end: int = 0
    end_marker: bool = True
    tcl: bool = False

    input_path: Optional[Path] = None
    output_path: Path = Path("data.txt")
    script_path: Path = Path("data.tcl")

    @property
    def has_hole(self) -> bool:
        return self.hole_begin < self.hole_end

    def validate(self) -> "ConverterConfig":
        """Burst uzunluğu ve adres alanlarını doğrula; hata varsa ConfigError."""
        if self.burst_length <= 0:
            raise ConfigError(f"burst length must be positive, got {self.burst_length}")
        if self.burst_length > MAX_BURST_LENGTH:
            raise ConfigError(
                f"burst length {self.burst_length} exceeds maximum {MAX_BURST_LENGTH}"
            )
        if self.burst_length % BURST_ALIGN:
            raise ConfigError(
                f"burst length {self.burst_length} is not a multiple of {BURST_ALIGN}"
            )

        for name in ("offset", "hole_begin", "hole_end"):
            value = getattr(self, name)
            if not 0 <= value <= MAX_UINT32:
                raise ConfigError(f"{name} 0x{value:x} is outside the 32-bit unsigned range")
        return self


# ═══════════════════════════════════════════════════════════════════════════
# JSON Configuration Schema
# ═══════════════════════════════════════════════════════════════════════════
CONFIG_SCHEMA = {
    "convert": {
        "output": {"type": "str", "default": "data.txt"},
        "burst": {"type": "int", "default": MAX_BURST_LENGTH, "min": BURST_ALIGN, "max": MAX_BURST_LENGTH},
        "end_marker": {"type": "bool", "default": True},
        "tcl": {"type": "bool", "default": False},
        "tcl_output": {"type": "str", "default": "data.tcl"},
        "offset": {"type": "int", "default": 0, "min": 0, "max": MAX_UINT32},
        "hole_begin": {"type": "int", "default": 0, "min": 0, "max": MAX_UINT32},
        "hole_end": {"type": "int", "default": 0, "min": 0, "max": MAX_UINT32},
    },
    "debug": {
        "enabled": {"type": "bool", "default": False},
        "log_dir": {"type": "str", "default": ".bin2fpgadata_debug"},
    },
}

KNOWN_TOP_KEYS = set(CONFIG_SCHEMA.keys()) | {"profiles", "$schema", "_comment", "_version"}


@dataclass
class JsonConfig:
    """Doğrulanmış JSON konfigürasyonu (bölüm → alan → değer)."""
    convert: Dict[str, Any] = field(default_factory=dict)
    debug: Dict[str, Any] = field(default_factory=dict)

    profile_name: Optional[str] = None
    config_file: Optional[Path] = None
    local_config_file: Optional[Path] = None

    # Kullanıcının dosyada açıkça verdiği anahtarlar ("convert.burst" gibi)
    explicit_keys: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════
class ConfigValidator:
    """Konfigürasyon doğrulama sınıfı"""

    def __init__(self):
        self.warnings: List[str] = []
        self.errors: List[str] = []

    def validate_type(self, value: Any, expected_type: str, path: str) -> bool:
        """Değer tipini doğrula"""
        type_map = {
            "str": str,
            "bool": bool,
            "int": int,
        }
        expected = type_map.get(expected_type)
        # bool, int'in alt sınıfı; "burst": true kabul edilmemeli
        if expected is int and isinstance(value, bool):
            self.errors.append(f"{path}: expected type 'int', got 'bool'")
            return False
        if expected and not isinstance(value, expected):
            self.errors.append(f"{path}: expected type '{expected_type}', got '{type(value).__name__}'")
            return False
        return True

    def validate_range(self, value: int, min_val: Optional[int], max_val: Optional[int], path: str) -> bool:
        """Sayısal değerin aralıkta olup olmadığını kontrol et"""
        if min_val is not None and value < min_val:
            self.errors.append(f"{path}: {value} is below minimum {min_val}")
            return False
        if max_val is not None and value > max_val:
            self.errors.append(f"{path}: {value} is above maximum {max_val}")
            return False
        return True

    def validate_section(self, data: Dict, section_name: str, schema: Dict) -> Tuple[Dict, List[str]]:
        """Bir bölümü doğrula ve varsayılanlarla doldur"""
        result = {}
        explicit = []
        section_data = data.get(section_name, {})

        if not isinstance(section_data, dict):
            self.errors.append(f"{section_name}: expected object, got {type(section_data).__name__}")
            section_data = {}

        for key in section_data.keys():
            if key.startswith("_"):
                continue
            if key not in schema:
                self.warnings.append(f"{section_name}.{key}: unknown parameter")

        for field_name, field_schema in schema.items():
            path = f"{section_name}.{field_name}"

            if field_name in section_data:
                value = section_data[field_name]
                if self.validate_type(value, field_schema["type"], path) and field_schema["type"] == "int":
                    self.validate_range(value, field_schema.get("min"), field_schema.get("max"), path)
                result[field_name] = value
                explicit.append(path)
            else:
                result[field_name] = field_schema["default"]

        return result, explicit


# ═══════════════════════════════════════════════════════════════════════════
# Config Loading Functions
# ═══════════════════════════════════════════════════════════════════════════
def find_config_files(config_dir: Optional[Path] = None) -> Tuple[Optional[Path], Optional[Path]]:
    """Konfigürasyon dosyalarını bul (varsayılan: çalışma dizini)"""
    if config_dir is None:
        config_dir = Path.cwd()

    main_config = config_dir / CONFIG_FILE_NAME
    local_config = config_dir / LOCAL_CONFIG_FILE_NAME

    if not main_config.exists():
        return None, None

    return main_config, local_config if local_config.exists() else None


def merge_dicts(base: Dict, override: Dict) -> Dict:
    """İki dict'i recursive olarak birleştir"""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def apply_profile(config_data: Dict, profile_name: str) -> Dict:
    """Profili uygula"""
    profiles = config_data.get("profiles", {})

    if profile_name not in profiles:
        available = list(profiles.keys())
        raise ConfigError(f"profile not found: '{profile_name}'. Available profiles: {available}")

    profile = profiles[profile_name]

    result = config_data.copy()
    for section in CONFIG_SCHEMA.keys():
        if section in profile:
            result[section] = merge_dicts(result.get(section, {}), profile[section])

    return result


def _read_json(path: Path) -> Dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"JSON parse error in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a JSON object")
    return data


def load_config(
    config_file: Optional[Path] = None,
    local_config_file: Optional[Path] = None,
    profile: Optional[str] = None,
    strict: bool = False,
) -> JsonConfig:
    """
    JSON konfigürasyonunu yükle ve doğrula.

    Args:
        config_file: Ana konfigürasyon dosyası (None ise çalışma dizininde aranır)
        local_config_file: Lokal override dosyası
        profile: Uygulanacak profil adı
        strict: True ise uyarıları hata olarak ele al

    Returns:
        JsonConfig: Doğrulanmış konfigürasyon

    Raises:
        FileNotFoundError: Konfigürasyon dosyası bulunamazsa
        ConfigError: Geçersiz konfigürasyon
    """
    if config_file is None:
        config_file, auto_local = find_config_files()
        if local_config_file is None:
            local_config_file = auto_local

    if config_file is None or not config_file.exists():
        raise FileNotFoundError(f"config file not found: {config_file}")

    config_data = _read_json(config_file)

    if local_config_file and local_config_file.exists():
        config_data = merge_dicts(config_data, _read_json(local_config_file))

    if profile:
        config_data = apply_profile(config_data, profile)

    validator = ConfigValidator()

    for key in config_data.keys():
        if key not in KNOWN_TOP_KEYS and not key.startswith("_"):
            validator.warnings.append(f"unknown top-level key: '{key}'")

    validated = {}
    explicit = []
    for section_name, section_schema in CONFIG_SCHEMA.items():
        validated[section_name], keys = validator.validate_section(config_data, section_name, section_schema)
        explicit.extend(keys)

    if validator.errors:
        raise ConfigError(
            f"{len(validator.errors)} error(s) in configuration: " + "; ".join(validator.errors)
        )

    if strict and validator.warnings:
        raise ConfigError(
            f"{len(validator.warnings)} warning(s) in strict mode: " + "; ".join(validator.warnings)
        )

    return JsonConfig(
        convert=validated["convert"],
        debug=validated["debug"],
        profile_name=profile,
        config_file=config_file,
        local_config_file=local_config_file if local_config_file and local_config_file.exists() else None,
        explicit_keys=explicit,
        warnings=validator.warnings,
    )
