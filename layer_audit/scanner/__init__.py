"""Scanner registry and dispatcher."""

from __future__ import annotations

from layer_audit.scanner.base import BaseScanner
from layer_audit.scanner.go_scanner import GoScanner

_SCANNERS: dict[str, type[BaseScanner]] = {
    "go": GoScanner,
}

LANGUAGES = sorted(_SCANNERS)


def get_scanner(language: str = "go", skip_dirs: list[str] | None = None) -> BaseScanner:
    try:
        scanner_cls = _SCANNERS[language]
    except KeyError:
        raise ValueError(f"No scanner for language: {language}") from None
    return scanner_cls(skip_dirs=skip_dirs)


__all__ = [
    "BaseScanner",
    "GoScanner",
    "LANGUAGES",
    "get_scanner",
]
