"""
Example 10: Simulated client population and bit-count estimation.

Goal:
    Give every simulated client its own secret and encoder, report one value
    per client, then sum the reported bits per position. Knowing p, q and f,
    the expected number of true Bloom bits per position can be recovered:

        q* = f/2 * (p + q) + (1 - f) * q
        p* = f/2 * (p + q) + (1 - f) * p
        t_j = (c_j - p* * N) / (q* - p*)

    The estimated counts on the bits of the popular value should be close to
    the number of clients that hold it. All clients share cohort 0 so that
    every variant maps the popular value to the same bits.

Usage:
    python examples/client/10_simulate_clients.py --quick --variant digest
"""
import logging
import sys
from pathlib import Path

import numpy as np

project_root = Path(__file__).resolve().parents[2]
src_root = project_root / "src"
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from examples._shared import cli, io
from rapporlib import Params, create_encoder
from rapporlib.client import from_le_bytes
from rapporlib.core.utils import create_rng, split_rng


def estimate_true_counts(bit_counts: np.ndarray, num_reports: int, params: Params) -> np.ndarray:
    """Unbiased estimate of how many reports had each Bloom bit set."""
    f, p, q = params.prob_f, params.prob_p, params.prob_q
    q_star = 0.5 * f * (p + q) + (1 - f) * q
    p_star = 0.5 * f * (p + q) + (1 - f) * p
    return (bit_counts - p_star * num_reports) / (q_star - p_star)


def main(argv=None):
    args = cli.parse_args("Simulated RAPPOR clients", argv)
    generator = create_rng(args.seed)
    # one encoder per client: keep the per-construction INFO lines out of the output
    logging.getLogger("rapporlib").setLevel(logging.WARNING)

    # 1. Setup
    n_clients = 2000 if args.quick else 20000
    params = io.load_params(
        args.params, Params(num_bits=64, num_hashes=2, prob_p=0.25, prob_q=0.75, prob_f=0.25)
    )
    popular, others = "Apple", [f"item-{i}" for i in range(50)]

    # 2. Each client: own secret, own IRR stream, one report
    client_rngs = split_rng(generator, n_clients)
    reports = []
    n_popular = 0
    for i, client_rng in enumerate(client_rngs):
        value = popular if generator.random() < 0.4 else others[int(generator.integers(len(others)))]
        n_popular += value == popular
        encoder = create_encoder(
            args.variant,
            "fruit",
            0,
            params,
            secret=i.to_bytes(8, "big"),
            irr_seed=int(client_rng.integers(2**63)),
        )
        reports.append(encoder.generate_report(value, user_id=i))

    # 3. Aggregate per-bit counts
    bit_counts = np.zeros(params.num_bits)
    for report in reports:
        bit_counts[from_le_bytes(report.irr).indices()] += 1
    estimates = estimate_true_counts(bit_counts, len(reports), params)

    # 4. Bits of the popular value
    exact = Params(num_bits=params.num_bits, num_hashes=params.num_hashes, prob_f=0.0, prob_p=0.0, prob_q=1.0)
    probe = create_encoder(args.variant, "probe", 0, exact)
    popular_bits = probe.encode_stages(popular).bloom.indices()
    other_bits = [j for j in range(params.num_bits) if j not in popular_bits]

    reports_path = io.write_reports(reports[:100], Path(args.outdir) / "10_reports.jsonl")
    result = {
        "name": "client/10_simulate_clients",
        "config": {
            "n_clients": n_clients,
            "variant": args.variant,
            "params": params.to_dict(),
        },
        "outputs": {
            "popular_bit_indices": popular_bits,
            "estimated_counts_popular": [float(estimates[j]) for j in popular_bits],
        },
        "metrics": {
            "popular_clients": n_popular,
            "average_signal": float(np.mean(estimates[popular_bits])),
            "average_other": float(np.mean(estimates[other_bits])) if other_bits else 0.0,
        },
        "artifacts": {"reports": str(reports_path)}
    }

    out_path = io.write_json(result, Path(args.outdir) / "10_simulate_clients.json")
    result["artifacts"]["json"] = str(out_path)

    return result


if __name__ == "__main__":
    res = main()
    io.print_summary(res)
