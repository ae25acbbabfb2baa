#!/usr/bin/env python3
"""
bin2fpgadata — Convert .bin into Tcl friendly .txt
==================================================

Binary dosyayı burst'ler halinde FPGA data transcript'ine (data.txt)
çevirir, isteğe bağlı olarak hw_axi write transaction script'i (data.tcl)
üretir.

Kullanım:
    bin2fpgadata -i firmware.bin
    bin2fpgadata -i firmware.bin -o fw.txt -b 256 --tcl
    bin2fpgadata -i firmware.bin --offset 0x80000000 --hole-begin 0x80001000 --hole-end 0x80002000
    bin2fpgadata -i firmware.bin --config bin2fpgadata.json --profile axi_256

Debug:
    BIN2FPGA_DEBUG=1 bin2fpgadata -i firmware.bin
    bin2fpgadata -i firmware.bin --debug
"""

import argparse
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from bin2fpgadata import console
from bin2fpgadata.config import ConfigError, ConverterConfig, JsonConfig, load_config
from bin2fpgadata.debug_logger import DebugLogger, create_logger
from bin2fpgadata.stream_driver import convert
from bin2fpgadata.transcript import TranscriptEmitter

TOOL_NAME = "bin2fpgadata"


def _int_arg(text: str) -> int:
    """Decimal veya 0x'li hex tamsayı."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{text}'")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Convert binary file to FPGA burst data txt (and optional Tcl script).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("-i", "--in", dest="input", type=Path, required=True,
                        help="Input binary file")
    parser.add_argument("-o", "--out", dest="output", type=Path, default=None,
                        help="Output data text file (default: data.txt)")
    parser.add_argument("-b", "--burst", type=_int_arg, default=None,
                        help="Burst length in bytes, multiple of 16, max 1024 (default: 1024)")
    parser.add_argument("--noeof", action="store_true",
                        help="Disable end of file char 0a")
    parser.add_argument("--tcl", action="store_true",
                        help="Generate Tcl script")
    parser.add_argument("--tcl-out", type=Path, default=None,
                        help="Tcl script path (default: data.tcl)")
    parser.add_argument("--offset", type=_int_arg, default=None,
                        help="Address offset (default: 0)")
    parser.add_argument("--hole-begin", type=_int_arg, default=None,
                        help="Address hole begin (default: 0)")
    parser.add_argument("--hole-end", type=_int_arg, default=None,
                        help="Address hole end, exclusive (default: 0)")

    parser.add_argument("--config", "-c", type=Path, default=None,
                        help="JSON config file (default: ./bin2fpgadata.json if present)")
    parser.add_argument("--profile", "-p", default=None,
                        help="Config profile to apply")
    parser.add_argument("--no-config", action="store_true",
                        help="Ignore JSON config, use CLI args and defaults only")
    parser.add_argument("--strict-config", action="store_true",
                        help="Treat JSON config warnings (unknown keys) as errors")

    parser.add_argument("--debug", action="store_true",
                        help="Enable debug log (also BIN2FPGA_DEBUG=1)")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help="Debug log directory")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable colored output")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only print errors")

    return parser.parse_args(argv)


# ═══════════════════════════════════════════════════════════════════════════
# Config Resolution (CLI > JSON > default)
# ═══════════════════════════════════════════════════════════════════════════
def _load_json_config(args: argparse.Namespace) -> Optional[JsonConfig]:
    if args.no_config:
        return None
    try:
        return load_config(config_file=args.config, profile=args.profile, strict=args.strict_config)
    except FileNotFoundError:
        if args.config is not None:
            raise ConfigError(f"config file not found: {args.config}")
        if args.profile:
            raise ConfigError(f"profile '{args.profile}' requested but no {TOOL_NAME}.json found")
        return None


def resolve_config(
    args: argparse.Namespace,
    json_config: Optional[JsonConfig] = None,
) -> Tuple[ConverterConfig, Dict[str, str]]:
    """
    CLI argümanları ve JSON konfigürasyonunu birleştir.

    Returns:
        (ConverterConfig, {alan: kaynak}) — kaynak: cli, json veya default
    """
    defaults = ConverterConfig()
    values: Dict[str, Any] = {}
    sources: Dict[str, str] = {}

    def pick(name: str, cli_value: Any, json_key: str, default: Any, convert=None) -> None:
        if cli_value is not None:
            values[name], sources[name] = cli_value, "cli"
        elif json_config is not None and f"convert.{json_key}" in json_config.explicit_keys:
            value = json_config.convert[json_key]
            values[name], sources[name] = (convert(value) if convert else value), "json"
        else:
            values[name], sources[name] = default, "default"

    pick("output_path", args.output, "output", defaults.output_path, Path)
    pick("burst_length", args.burst, "burst", defaults.burst_length)
    pick("end_marker", False if args.noeof else None, "end_marker", defaults.end_marker)
    pick("tcl", True if args.tcl else None, "tcl", defaults.tcl)
    pick("script_path", args.tcl_out, "tcl_output", defaults.script_path, Path)
    pick("offset", args.offset, "offset", defaults.offset)
    pick("hole_begin", args.hole_begin, "hole_begin", defaults.hole_begin)
    pick("hole_end", args.hole_end, "hole_end", defaults.hole_end)

    values["input_path"] = args.input
    sources["input_path"] = "cli"

    return ConverterConfig(**values), sources


# ═══════════════════════════════════════════════════════════════════════════
# Conversion
# ═══════════════════════════════════════════════════════════════════════════
def print_banner(config: ConverterConfig) -> None:
    console.rule()
    console.info("Convert binary file to fpga data txt:")
    console.info(f"  input file       : {config.input_path}")
    console.info(f"  output file      : {config.output_path}")
    console.info(f"  data burst length: {config.burst_length}")

    if config.offset > 0:
        console.info(f"add offset 0x{config.offset:x} to all addresses")
    if config.has_hole:
        console.info(f"add address hole [0x{config.hole_begin:x} - 0x{config.hole_end:x})")
    console.rule()


def run_conversion(config: ConverterConfig, logger: DebugLogger) -> int:
    """Dosyaları aç, dönüştür, kapat. Başarıda 0, I/O hatasında 1 döner."""
    logger.section("Files")

    with ExitStack() as stack:
        try:
            in_fp = stack.enter_context(open(config.input_path, "rb"))
        except OSError as e:
            console.error(f"Invalid input file: {config.input_path} ({e.strerror})")
            logger.error(f"input open failed: {e}")
            return 1
        logger.file("input", config.input_path)

        try:
            out_fp = stack.enter_context(open(config.output_path, "w", newline="\n"))
        except OSError as e:
            console.error(f"Invalid output file: {config.output_path} ({e.strerror})")
            logger.error(f"output open failed: {e}")
            return 1

        tcl_fp = None
        if config.tcl:
            try:
                tcl_fp = stack.enter_context(open(config.script_path, "w", newline="\n"))
            except OSError as e:
                console.error(f"Invalid tcl script file: {config.script_path} ({e.strerror})")
                logger.error(f"tcl script open failed: {e}")
                return 1

        input_size = Path(config.input_path).stat().st_size
        console.info(f"input size: {input_size}")

        logger.section("Conversion")
        emitter = TranscriptEmitter(out_fp, tcl_fp)
        stats = convert(in_fp, config, emitter, logger)

    logger.file("output", config.output_path)
    if config.tcl:
        logger.file("tcl_script", config.script_path)

    if config.end_marker:
        console.info("add eof char: '0a'")
    if config.tcl:
        console.success(f"tcl script generated: {config.script_path}")

    msg = f"{stats.bursts_emitted} burst(s) written to {config.output_path}"
    if stats.bursts_skipped:
        msg += f", {stats.bursts_skipped} skipped by address hole"
    console.success(msg)

    logger.result(True, 0, "Conversion completed", details={
        "input_bytes": stats.input_bytes,
        "bursts_emitted": stats.bursts_emitted,
        "bursts_skipped": stats.bursts_skipped,
    })
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    console.configure(color=not args.no_color and sys.stdout.isatty(), quiet=args.quiet)

    try:
        json_config = _load_json_config(args)
        config, sources = resolve_config(args, json_config)
        config.validate()
    except ConfigError as e:
        console.error(str(e))
        return 1

    if json_config is not None:
        for w in json_config.warnings:
            console.warn(f"config: {w}")

    debug_cfg = json_config.debug if json_config is not None else {}
    logger = create_logger(
        tool_name=TOOL_NAME,
        log_dir=args.log_dir or debug_cfg.get("log_dir"),
        debug_enabled=args.debug or debug_cfg.get("enabled", False),
    )

    with logger:
        logger.section("CLI Arguments")
        logger.params(vars(args), source="cli")

        if json_config is not None:
            logger.section("JSON Configuration")
            logger.param("config_file", json_config.config_file, "json")
            logger.param("local_config_file", json_config.local_config_file, "json")
            logger.param("profile", json_config.profile_name or "default", "json")
            for w in json_config.warnings:
                logger.warning(w)

        logger.section("Resolved Configuration")
        for name, source in sources.items():
            logger.param(name, getattr(config, name), source)

        print_banner(config)
        exit_code = run_conversion(config, logger)
        if exit_code:
            logger.result(False, exit_code, "I/O error")

    if logger.enabled:
        console.info(f"debug log: {logger.log_dir}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
