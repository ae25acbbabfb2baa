"""
Renkli konsol çıktısı yardımcıları (colorama).

Kullanım:
    from bin2fpgadata.console import info, warn, error, success

    info("input size: 4096")
"""

import sys

from colorama import Fore, Style, just_fix_windows_console

_state = {"color": True, "quiet": False}


def configure(color: bool = True, quiet: bool = False) -> None:
    """Renkleri ve sessiz modu ayarla (--no-color, -q)."""
    if color:
        just_fix_windows_console()
    _state["color"] = color
    _state["quiet"] = quiet


def _paint(color: str, text: str) -> str:
    if not _state["color"]:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def info(msg: str) -> None:
    if _state["quiet"]:
        return
    print(f"{_paint(Fore.CYAN, '[INFO]')} {msg}")


def warn(msg: str) -> None:
    if _state["quiet"]:
        return
    print(f"{_paint(Fore.YELLOW, '[WARN]')} {msg}", file=sys.stderr)


def error(msg: str) -> None:
    # Hatalar -q ile de gösterilir
    print(f"{_paint(Fore.RED, '[ERROR]')} {msg}", file=sys.stderr)


def success(msg: str) -> None:
    if _state["quiet"]:
        return
    print(f"{_paint(Fore.GREEN, '[OK]')} {msg}")


def rule(char: str = "═", width: int = 60) -> None:
    if _state["quiet"]:
        return
    print(_paint(Fore.CYAN, char * width))
