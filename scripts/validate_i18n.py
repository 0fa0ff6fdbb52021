#!/usr/bin/env python3
"""Validate i18n locale files for consistency.

Standalone CI script (stdlib only). Checks JSON syntax, key parity
between locales, empty values, and that every literal ``t("...")`` key
used in the gamelog package resolves in the English files.

Exit code 0 = all checks passed, 1 = at least one failure.
"""

from __future__ import annotations

import json
import re
import sys
from pathlib import Path

__all__: list[str] = []

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = REPO_ROOT / "gamelog"
I18N_DIR = PACKAGE_DIR / "resources" / "i18n"
LOCALE_DIRS = ["en", "de"]
SHARED_FILES = ["logs.json"]

# Literal keys only; f-string keys (slot names) are checked via the slot table
_T_CALL_RE = re.compile(r"""\bt\(\s*["']([a-z0-9_.]+)["']""")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def flatten(data: dict, prefix: str = "") -> dict[str, object]:
    """Flatten a nested dict into dot-notation leaf keys -> values."""
    flat: dict[str, object] = {}
    for k, v in data.items():
        full_key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            flat.update(flatten(v, full_key))
        else:
            flat[full_key] = v
    return flat


def load_tree(files: list[Path], errors: list[str]) -> dict[str, object]:
    """Load and flatten several JSON files, recording syntax errors."""
    merged: dict[str, object] = {}
    for path in files:
        try:
            merged.update(flatten(json.loads(path.read_text(encoding="utf-8"))))
        except (OSError, json.JSONDecodeError) as exc:
            errors.append(f"  {path.relative_to(REPO_ROOT)}: {exc}")
    return merged


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> int:
    """Run all checks and report results.

    Returns:
        Exit code: 0 if everything passed, 1 otherwise.
    """
    errors: list[str] = []

    shared = load_tree([I18N_DIR / name for name in SHARED_FILES], errors)
    locales = {
        locale: load_tree(sorted((I18N_DIR / locale).glob("*.json")), errors) for locale in LOCALE_DIRS
    }

    reference = locales[LOCALE_DIRS[0]]
    for locale in LOCALE_DIRS[1:]:
        for key in sorted(set(reference) - set(locales[locale])):
            errors.append(f"  Missing in {locale}: {key}")
        for key in sorted(set(locales[locale]) - set(reference)):
            errors.append(f"  Missing in {LOCALE_DIRS[0]}: {key}")

    for locale, keys in [("shared", shared), *locales.items()]:
        for key, value in keys.items():
            if value == "":
                errors.append(f"  {locale}: empty value for '{key}'")

    known = set(shared) | set(reference)
    for source in sorted(PACKAGE_DIR.rglob("*.py")):
        for key in _T_CALL_RE.findall(source.read_text(encoding="utf-8")):
            if key not in known:
                errors.append(f"  {source.relative_to(REPO_ROOT)}: unknown key '{key}'")

    print("=== i18n Validation ===")  # noqa: T201
    for msg in errors:
        print(msg)  # noqa: T201

    if not errors:
        print("=== RESULT: PASS ===")  # noqa: T201
        return 0

    print(f"=== RESULT: FAIL ({len(errors)} issue{'s' if len(errors) != 1 else ''}) ===")  # noqa: T201
    return 1


if __name__ == "__main__":
    sys.exit(main())
