"""
Input/Output helpers for the encoder examples.
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from rapporlib import Params, RapporReport


def ensure_outdir(path: Union[str, Path]) -> Path:
    """Ensure the output directory exists."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def load_params(path: Optional[str], default: Params) -> Params:
    """Read Params from a k,h,m,p,q,f CSV file, or return ``default`` when no path is given."""
    if path is None:
        return default
    with open(path, newline="", encoding="utf-8") as f:
        return Params.from_csv(f)


def write_json(data: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Write data to a JSON file."""
    p = Path(path)
    ensure_outdir(p.parent)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)
    return p


def write_reports(reports: Iterable[RapporReport], path: Union[str, Path]) -> Path:
    """Write one versioned JSON report per line, user ids masked."""
    p = Path(path)
    ensure_outdir(p.parent)
    with open(p, "w", encoding="utf-8") as f:
        for report in reports:
            f.write(report.to_json(sensitive_fields=["user_id"]))
            f.write("\n")
    return p


def print_summary(result: Dict[str, Any]) -> None:
    """
    Print a summary of the example result to stdout.

    Expects result dict to have keys: 'name', 'config', 'metrics', 'artifacts'.
    """
    print("=" * 60)
    print(f"EXAMPLE: {result.get('name', 'Unknown')}")
    for section in ("config", "metrics", "artifacts"):
        entries = result.get(section)
        if not entries:
            continue
        print("-" * 60)
        print(f"{section.capitalize()}:")
        for k, v in entries.items():
            print(f"  {k}: {v}")
    print("=" * 60)
