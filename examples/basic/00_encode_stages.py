"""
Example 00: One value through every encoding stage.

Goal:
    Build an encoder for the selected hash variant, then show the Bloom
    filter, the permanent response and the instantaneous response of a few
    values together with the little-endian bytes that would be reported.
    Also shows how an unsupported width yields an invalid encoder instead of
    an exception.

Usage:
    python examples/basic/00_encode_stages.py --seed 123 --variant rolling
"""
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
src_root = project_root / "src"
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from examples._shared import cli, io
from rapporlib import InvalidEncoderError, Params, configure, create_encoder
from rapporlib.client import bit_string, to_le_bytes


def main(argv=None):
    args = cli.parse_args("Encode stages demo", argv)

    # 1. Runtime configuration: reproducible IRR sources
    configure(rng_seed=args.seed)
    params = io.load_params(args.params, Params(num_bits=32, num_hashes=2, prob_f=0.5))
    encoder = create_encoder(args.variant, "example-metric", 0, params, secret=b"example-secret")

    # 2. Encode a few values and keep every stage
    stages = {}
    for value in ["x", "apple", "https://example.com/"]:
        trace = encoder.encode_stages(value)
        stages[value] = {
            "bloom": bit_string(trace.bloom),
            "prr": bit_string(trace.prr),
            "irr": bit_string(trace.irr),
            "bytes": to_le_bytes(trace.irr, encoder.num_bytes).hex(),
        }

    # 3. A width that is not a whole number of bytes never raises at construction
    broken = create_encoder(args.variant, "broken-metric", 0, Params(num_bits=10))
    try:
        broken.encode("x")
        broken_error = None
    except InvalidEncoderError as exc:
        broken_error = str(exc)

    result = {
        "name": "basic/00_encode_stages",
        "config": {
            "seed": args.seed,
            "variant": args.variant,
            "params": params.to_dict(),
        },
        "outputs": {
            "stages": stages,
            "encoder": dict(encoder.get_metadata()),
        },
        "metrics": {
            "num_bytes": encoder.num_bytes,
            "broken_is_valid": broken.is_valid,
            "broken_error": broken_error,
        },
        "artifacts": {}
    }

    out_path = io.write_json(result, Path(args.outdir) / "00_encode_stages.json")
    result["artifacts"]["json"] = str(out_path)

    return result


if __name__ == "__main__":
    res = main()
    io.print_summary(res)
