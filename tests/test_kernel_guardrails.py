"""Guardrails to keep the processing kernel free of CLI and session concerns."""

import re
from pathlib import Path


FORBIDDEN_PATTERNS = {
    "argparse": re.compile(r"\bargparse\b"),
    "print(": re.compile(r"(?<![A-Za-z0-9_.])print\s*\("),
    "sys.exit": re.compile(r"\bsys\.exit\b"),
    "logging.basicConfig": re.compile(r"\blogging\.basicConfig\b"),
    "os.environ": re.compile(r"\bos\.environ\b"),
    "vsixproc.api": re.compile(r"\bvsixproc\.api\b"),
    "vsixproc.cli": re.compile(r"\bvsixproc\.cli\b"),
    "vsixproc.processor": re.compile(r"\bvsixproc\.processor\b"),
}


def test_kernel_has_no_forbidden_tokens():
    kernel_dir = Path(__file__).resolve().parents[1] / "src" / "vsixproc" / "kernel"
    offenders = []

    for path in kernel_dir.glob("*.py"):
        contents = path.read_text(encoding="utf-8")
        for token, pattern in FORBIDDEN_PATTERNS.items():
            if pattern.search(contents):
                offenders.append(f"{path.name}: {token}")

    assert not offenders, "Forbidden kernel tokens found: " + ", ".join(offenders)


def test_kernel_modules_log_through_module_loggers():
    kernel_dir = Path(__file__).resolve().parents[1] / "src" / "vsixproc" / "kernel"
    for path in kernel_dir.glob("*.py"):
        contents = path.read_text(encoding="utf-8")
        if "import logging" in contents:
            assert "logging.getLogger(__name__)" in contents, path.name
