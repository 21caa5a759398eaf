"""
Run every registered example in a subprocess and report pass/fail.
"""
import argparse
import subprocess
import sys
from pathlib import Path
from typing import List

sys.path.append(str(Path(__file__).resolve().parent.parent))

from examples.registry import EXAMPLES

EXAMPLES_DIR = Path(__file__).resolve().parent


def build_command(script: Path, variant: str, args: argparse.Namespace) -> List[str]:
    """Command line for one example run; outputs are grouped per hash variant."""
    cmd = [
        sys.executable, str(script),
        "--seed", str(args.seed),
        "--outdir", str(Path(args.outdir) / variant),
        "--variant", variant,
    ]
    if args.quick:
        cmd.append("--quick")
    return cmd


def main():
    parser = argparse.ArgumentParser(description="Run rapporlib examples.")
    parser.add_argument("--quick", action="store_true", help="Run examples in quick mode")
    parser.add_argument("--seed", type=int, default=0, help="Seed forwarded to every example")
    parser.add_argument("--outdir", type=str, default="./_outputs", help="Output directory base")
    parser.add_argument("--include-tags", type=str, help="Comma-separated tags to include (e.g. 'p0,client')")
    parser.add_argument("--all-variants", action="store_true", help="Run every example once per hash variant")
    parser.add_argument("--fail-fast", action="store_true", help="Stop on first failure")
    args = parser.parse_args()

    tags = set(args.include_tags.split(",")) if args.include_tags else set()
    selected = [e for e in EXAMPLES if not tags or tags.intersection(e["tags"])]
    passed, failed = [], []

    print(f"Running {len(selected)} of {len(EXAMPLES)} examples (seed={args.seed}, quick={args.quick})")
    print("-" * 60)
    for entry in selected:
        # 默认只跑摘要变体，--all-variants 时遍历全部哈希策略
        variants = entry["variants"] if args.all_variants else ["digest"]
        for variant in variants:
            label = f"{entry['path']} [{variant}]"
            print(f"[RUN ] {label} ...", end="", flush=True)
            proc = subprocess.run(
                build_command(EXAMPLES_DIR / entry["path"], variant, args), capture_output=True, text=True
            )
            if proc.returncode == 0:
                print(" [PASS]")
                passed.append(label)
                continue
            print(f" [FAIL] exit code {proc.returncode}")
            print(proc.stderr)
            failed.append(label)
            if args.fail_fast:
                break
        if failed and args.fail_fast:
            break

    print("-" * 60)
    print(f"Summary: {len(passed)} passed, {len(failed)} failed, {len(EXAMPLES) - len(selected)} skipped")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
