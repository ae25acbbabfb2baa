#!/usr/bin/env python3
"""
bin2fpgadata — Conversion Run Log

Bir dönüşüm çalıştırmasının debug kaydı: çözülmüş parametreler (kaynağıyla
birlikte), girdi/çıktı dosyaları, hole tarafından atlanan adres aralıkları
ve terminal burst'ün ayrıntıları (gerçek byte sayısı, EOF karakterinin
string içindeki yeri).

--debug flag'i veya BIN2FPGA_DEBUG=1 ile aktif olur. Kayıt bittiğinde
<log_dir>/debug_bin2fpgadata_<zaman>.log ve .json dosyaları yazılır;
*_latest kopyaları her seferinde güncellenir.

Kullanım:
    with create_logger("bin2fpgadata", log_dir, True) as logger:
        logger.section("Conversion")
        logger.record("hole_skip", first=0x1000, end=0x2000, bursts=4)
        logger.result(True, 0, "Conversion completed")
"""

import json
import os
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

DEBUG_ENV = "BIN2FPGA_DEBUG"
DEBUG_ECHO_ENV = "BIN2FPGA_DEBUG_ECHO"

SOURCE_TAGS = {"cli": "CLI", "json": "JSON", "default": "DEF", "computed": "CALC"}
EVENT_MARKS = {"note": "-", "warning": "!", "error": "x"}


def _format_value(value: Any) -> str:
    # Adres/uzunluk alanları log'da hex okunur
    if isinstance(value, bool) or not isinstance(value, int):
        return str(value)
    return f"0x{value:x}" if value >= 0x100 else str(value)


class DebugLogger:
    """Dönüşüm çalıştırması için bölümlü text + JSON kayıt."""

    def __init__(
        self,
        tool_name: str,
        log_dir: Optional[Path] = None,
        enabled: bool = True,
        console_echo: bool = False
    ):
        self.tool_name = tool_name
        self.enabled = enabled
        self.console_echo = console_echo
        self.start_time = datetime.now()
        self.log_dir = Path(log_dir) if log_dir else Path.cwd() / f".{tool_name}_debug"

        self.lines: List[str] = []
        self.sections: List[Dict[str, Any]] = []
        self.run: Dict[str, Any] = {
            "tool": tool_name,
            "start_time": self.start_time.isoformat(),
            "python_version": sys.version.split()[0],
            "cwd": os.getcwd(),
            "argv": sys.argv,
        }

        self._emit(f"{tool_name} run log — {self.start_time:%Y-%m-%d %H:%M:%S}")

    def _emit(self, line: str) -> None:
        if not self.enabled:
            return
        self.lines.append(line)
        if self.console_echo:
            print(f"[DEBUG] {line}")

    def _current(self) -> Optional[Dict[str, Any]]:
        return self.sections[-1] if self.sections else None

    # ═══════════════════════════════════════════════════════════════════════
    # Sections, Parameters, Records
    # ═══════════════════════════════════════════════════════════════════════
    def section(self, name: str) -> None:
        self.sections.append({"name": name, "params": {}, "records": [], "events": []})
        self._emit("")
        self._emit(f"── {name} " + "─" * max(0, 74 - len(name)))

    def param(self, name: str, value: Any, source: str = "computed") -> None:
        """Tek parametre; source: cli, json, default veya computed."""
        tag = SOURCE_TAGS.get(source, source[:4].upper())
        self._emit(f"  [{tag:4}] {name:<22} = {_format_value(value)}")
        current = self._current()
        if current is not None:
            current["params"][name] = {"value": value, "source": source}

    def params(self, values: Any, source: str = "computed", prefix: str = "") -> None:
        """Dict veya dataclass içindeki tüm alanları logla."""
        if is_dataclass(values):
            values = asdict(values)
        for key, value in values.items():
            self.param(f"{prefix}.{key}" if prefix else key, value, source)

    def record(self, kind: str, **fields: Any) -> None:
        """Yapısal kayıt (hole_skip, terminal_burst, file ...)."""
        body = " ".join(f"{k}={_format_value(v)}" for k, v in fields.items())
        self._emit(f"  <{kind}> {body}")
        current = self._current()
        if current is not None:
            current["records"].append({"kind": kind, **fields})

    def file(self, role: str, path: Path) -> None:
        """Dosya kaydı: var mı, kaç byte."""
        path = Path(path)
        size = path.stat().st_size if path.is_file() else None
        self.record("file", role=role, path=str(path), exists=path.exists(), size=size)

    def _event(self, level: str, message: str) -> None:
        self._emit(f"  {EVENT_MARKS[level]} {message}")
        current = self._current()
        if current is not None:
            current["events"].append({"level": level, "message": message})

    def note(self, message: str) -> None:
        self._event("note", message)

    def warning(self, message: str) -> None:
        self._event("warning", message)

    def error(self, message: str) -> None:
        self._event("error", message)

    # ═══════════════════════════════════════════════════════════════════════
    # Result and Save
    # ═══════════════════════════════════════════════════════════════════════
    def result(
        self,
        success: bool,
        exit_code: int = 0,
        message: str = "",
        details: Optional[Mapping[str, Any]] = None
    ) -> None:
        elapsed = (datetime.now() - self.start_time).total_seconds()
        status = "SUCCESS" if success else "FAILED"
        self._emit("")
        self._emit(f"{status} - {message} (exit {exit_code}, {elapsed:.2f}s)")
        for key, value in (details or {}).items():
            self._emit(f"  {key}: {_format_value(value)}")

        self.run.update(
            success=success,
            exit_code=exit_code,
            message=message,
            elapsed_seconds=elapsed,
            details=dict(details or {}),
        )

    def save(self) -> Optional[Path]:
        """Log'u yaz; kapalıysa None döner."""
        if not self.enabled:
            return None

        self.log_dir.mkdir(parents=True, exist_ok=True)
        stem = f"debug_{self.tool_name}"
        stamp = self.start_time.strftime("%Y%m%d_%H%M%S")
        text = "\n".join(self.lines) + "\n"
        payload = json.dumps({"run": self.run, "sections": self.sections}, indent=2, default=str)

        for name in (f"{stem}_{stamp}", f"{stem}_latest"):
            (self.log_dir / f"{name}.log").write_text(text)
            (self.log_dir / f"{name}.json").write_text(payload)

        return self.log_dir / f"{stem}_{stamp}.log"

    def __enter__(self) -> "DebugLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.error(f"Exception: {exc_type.__name__}: {exc_val}")
        self.save()


def create_logger(
    tool_name: str,
    log_dir: Optional[Path] = None,
    debug_enabled: bool = False
) -> DebugLogger:
    """--debug veya BIN2FPGA_DEBUG=1 ile aktif logger."""
    return DebugLogger(
        tool_name=tool_name,
        log_dir=log_dir,
        enabled=debug_enabled or os.environ.get(DEBUG_ENV, "0") == "1",
        console_echo=os.environ.get(DEBUG_ECHO_ENV, "0") == "1"
    )
