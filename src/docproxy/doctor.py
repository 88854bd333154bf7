"""Diagnostic tool for verifying the docproxy installation."""

from importlib import import_module
from typing import Optional

from rich.console import Console
from rich.table import Table

# (module to import, distribution name)
CORE_DEPENDENCIES = [
    ("html2text", "html2text"),
    ("pydantic", "pydantic"),
    ("rich", "rich"),
    ("yaml", "pyyaml"),
    ("playwright.async_api", "playwright"),
    ("mitmproxy.http", "mitmproxy"),
]


def check_dependency(module_name: str, package_name: Optional[str] = None) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)

    Returns:
        Tuple of (success, message)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        return False, f"[MISSING] {display_name}"


def check_browser() -> tuple[bool, str]:
    """Check that Playwright has a Chromium build downloaded."""
    try:
        from playwright.sync_api import sync_playwright

        with sync_playwright() as p:
            executable = p.chromium.executable_path
    except Exception as e:
        return False, f"[FAIL] Chromium - {e}"

    return True, f"[OK] Chromium ({executable})"


def run_doctor(console: Optional[Console] = None, check_chromium: bool = True) -> int:
    """
    Run diagnostic checks and display results.

    Args:
        console: Console to print to (a new one if None)
        check_chromium: Also look for the Playwright Chromium build

    Returns:
        Exit code (0 if every check passed, 1 otherwise)
    """
    console = console or Console()
    console.print("Running docproxy diagnostics...\n")

    results = {
        "Dependencies": [check_dependency(mod, pkg) for mod, pkg in CORE_DEPENDENCIES],
    }
    if check_chromium:
        results["Browser"] = [check_browser()]

    for category, checks in results.items():
        table = Table(title=category, show_header=False, box=None)
        table.add_column("Status", style="bold")

        for success, message in checks:
            table.add_row(message, style="green" if success else "red")

        console.print(table)
        console.print()

    failed = [message for checks in results.values() for success, message in checks if not success]
    if failed:
        console.print("[red]Some checks failed.[/red]")
        console.print("\nRecommended fixes:")
        console.print("  1. Reinstall: pip install --upgrade --force-reinstall docproxy")
        console.print("  2. Download Chromium: playwright install chromium")
        return 1

    console.print("[green]All checks passed![/green]")
    return 0
