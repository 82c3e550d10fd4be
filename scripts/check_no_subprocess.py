#!/usr/bin/env python3
"""CI guard: the library never runs a pager.

Fails if code imports process-spawning modules or calls os-level exec/spawn
functions. deltaenv only decides which pager command to use; running it is
the host program's job.

Usage:
    python scripts/check_no_subprocess.py [directory]

Arguments:
    directory: Directory to scan (default: src/)

Exit codes:
    0: No process-spawning code found
    1: Process-spawning code detected
    2: Error
"""

import ast
import sys
from pathlib import Path


# Forbidden imports
FORBIDDEN_IMPORTS = {
    "subprocess",
    "multiprocessing",
    "pty",
    "pexpect",
    "sh",
    "plumbum",
}

# Forbidden os.<name>(...) calls
FORBIDDEN_OS_CALLS = {
    "system",
    "popen",
    "fork",
    "forkpty",
    "posix_spawn",
    "posix_spawnp",
}

# Partial matches (os.<prefix>...)
FORBIDDEN_OS_PREFIXES = [
    "exec",
    "spawn",
]


def _is_forbidden_os_call(name: str) -> bool:
    if name in FORBIDDEN_OS_CALLS:
        return True
    return any(name.startswith(prefix) for prefix in FORBIDDEN_OS_PREFIXES)


def check_file(filepath: Path) -> list[str]:
    """Check a Python file for process-spawning code."""
    violations = []

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        return [f"Could not read file: {e}"]

    try:
        tree = ast.parse(content, filename=str(filepath))
    except SyntaxError as e:
        return [f"Syntax error: {e}"]

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name.split(".")[0] in FORBIDDEN_IMPORTS:
                    violations.append(f"Line {node.lineno}: import {alias.name}")

        elif isinstance(node, ast.ImportFrom):
            module = node.module or ""
            if module.split(".")[0] in FORBIDDEN_IMPORTS:
                violations.append(f"Line {node.lineno}: from {module} import ...")
            elif module == "os":
                for alias in node.names:
                    if _is_forbidden_os_call(alias.name):
                        violations.append(
                            f"Line {node.lineno}: from os import {alias.name}"
                        )

        elif isinstance(node, ast.Call):
            func = node.func
            if (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id == "os"
                and _is_forbidden_os_call(func.attr)
            ):
                violations.append(f"Line {node.lineno}: os.{func.attr}(...)")

    return violations


def main():
    directory = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("src")

    if not directory.exists():
        print(f"ERROR: Directory not found: {directory}")
        sys.exit(2)

    all_violations = {}

    for filepath in directory.rglob("*.py"):
        violations = check_file(filepath)
        if violations:
            all_violations[str(filepath)] = violations

    if all_violations:
        print("ERROR: Process-spawning code detected")
        print("\nThe pager is resolved here and run by the host program:\n")
        for filepath, violations in sorted(all_violations.items()):
            print(f"{filepath}:")
            for v in violations:
                print(f"  {v}")
        sys.exit(1)

    print(f"OK: No process-spawning code found in {directory}")
    sys.exit(0)


if __name__ == "__main__":
    main()
