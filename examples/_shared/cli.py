"""
Command-line flags shared by the encoder examples.
"""
import argparse
import sys
from typing import List, Optional

VARIANTS = ("rolling", "digest", "cohort")


def build_parser(description: str) -> argparse.ArgumentParser:
    """ArgumentParser with --seed, --quick, --outdir, --params and --variant."""
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed for IRR sources and the simulated population (default: 0)")
    parser.add_argument("--quick", action="store_true",
                        help="Fewer simulated clients")
    parser.add_argument("--outdir", type=str, default="./_outputs",
                        help="Directory for JSON results (default: ./_outputs)")
    parser.add_argument("--params", type=str, default=None,
                        help="k,h,m,p,q,f CSV file; built-in parameters when omitted")
    parser.add_argument("--variant", choices=VARIANTS, default="digest",
                        help="Bloom filter hash strategy (default: digest)")
    return parser


def parse_args(description: str, argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser(description).parse_args(sys.argv[1:] if argv is None else argv)
