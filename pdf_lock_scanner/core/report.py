"""
Report rendering for the PDF Lock Scanner.
"""

from typing import List, Sequence

from .scanner import ScanResult


DEFAULT_REPORT_PATH = "pdf-lock-report.md"


def printable(text: str) -> str:
    """Replace undecodable filename bytes (surrogate escapes) with U+FFFD"""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _partition(results: Sequence[ScanResult]):
    cracked = [r for r in results if r.is_cracked]
    locked = [r for r in results if r.is_still_locked]
    accessible = [r for r in results if r.is_accessible]
    # a locked file whose crack attempt failed is listed in both sections
    errors = [r for r in results if r.error is not None]
    return cracked, locked, accessible, errors


def _entry(result: ScanResult) -> str:
    return f"- `{printable(result.filename)}` - {printable(result.path)}\n"


def generate_report(results: Sequence[ScanResult], crack_enabled: bool = True) -> str:
    """Render the Markdown report for a scan"""
    cracked, locked, accessible, errors = _partition(results)

    report = "# PDF Password Protection Report\n\n"
    report += f"**Total PDFs scanned:** {len(results)}\n"
    report += f"**Password Protected:** {len(locked)}\n"
    if crack_enabled:
        report += f"**Passwords Cracked:** {len(cracked)}\n"
    report += f"**Accessible:** {len(accessible)}\n"
    if errors:
        report += f"**Errors:** {len(errors)}\n"
    report += "\n"

    if cracked:
        report += "## Cracked Password Files\n\n"
        for result in cracked:
            report += _entry(result)
            report += f"  - **Password:** `{result.cracked_password}`\n"
        report += "\n"

    if locked:
        report += "## Still Password Protected Files\n\n"
        for result in locked:
            report += _entry(result)
        report += "\n"

    if accessible:
        report += "## Accessible Files\n\n"
        for result in accessible:
            report += _entry(result)
        report += "\n"

    if errors:
        report += "## Files With Errors\n\n"
        for result in errors:
            report += _entry(result)
            report += f"  - **Error:** {printable(result.error)}\n"
        report += "\n"

    return report.rstrip("\n") + "\n"


def summary_lines(results: Sequence[ScanResult], crack_enabled: bool = True) -> List[str]:
    """Console summary mirroring the report"""
    cracked, locked, accessible, errors = _partition(results)

    lines = [
        "",
        "PDF Password Check Results",
        "=" * 32,
        f"Total PDFs: {len(results)}",
        f"Still Locked: {len(locked)}",
    ]
    if crack_enabled:
        lines.append(f"Passwords Cracked: {len(cracked)}")
    lines.append(f"Unlocked: {len(accessible)}")
    if errors:
        lines.append(f"Errors: {len(errors)}")
    lines.append("")

    if cracked:
        lines.append("PASSWORDS CRACKED:")
        lines.extend(f"   {printable(r.filename)} - Password: {r.cracked_password}" for r in cracked)
        lines.append("")
    if locked:
        lines.append("STILL PASSWORD PROTECTED:")
        lines.extend(f"   {printable(r.filename)}" for r in locked)
        lines.append("")
    if accessible:
        lines.append("ACCESSIBLE:")
        lines.extend(f"   {printable(r.filename)}" for r in accessible)
        lines.append("")
    if errors:
        lines.append("ERRORS:")
        lines.extend(f"   {printable(r.filename)} - {printable(r.error)}" for r in errors)
        lines.append("")
    return lines


def display_results(results: Sequence[ScanResult], crack_enabled: bool = True) -> None:
    print("\n".join(summary_lines(results, crack_enabled)))


def write_report(results: Sequence[ScanResult], report_path: str = DEFAULT_REPORT_PATH,
                 crack_enabled: bool = True) -> str:
    """Write the Markdown report and return its path"""
    with open(report_path, "w", encoding="utf-8", errors="replace") as f:
        f.write(generate_report(results, crack_enabled))
    return report_path
