"""
Example 01: Time-series fingerprint of monthly order totals.

Goal:
    Aggregate order totals per month and fingerprint the (month, total)
    pairs: linear trend, gap-filled series, growth rates, and (with
    --computation unbounded) an STL seasonal decomposition.

Usage:
    python examples/basic/01_time_series.py --scale month --computation unbounded
"""
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
src_root = project_root / "src"
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from examples._shared import cli, io, toy_data
from fplib import FingerprintOptions, fingerprint_values
from fplib.types import DATETIME_TAG, NUMBER_TAG

def main(argv=None):
    args = cli.parse_args("Time Series Fingerprint Demo", argv)

    generator = toy_data.make_rng(args.seed)
    n_rows = 2000 if args.quick else 20000
    series = toy_data.monthly_totals(toy_data.build_orders_dataset(n_rows, rng=generator))

    options = FingerprintOptions.from_mapping(
        {"scale": args.scale, "max_cost": {"computation": args.computation}}
    )
    fp = fingerprint_values(options, (DATETIME_TAG, NUMBER_TAG), series)

    decomposition = fp["seasonal_decomposition"]
    growth_keys = [k for k in ("YoY", "MoM", "WoW", "DoD") if k in fp]
    result = {
        "name": "basic/01_time_series",
        "config": {
            "seed": args.seed,
            "scale": args.scale,
            "computation": args.computation,
            "n_points": len(fp["series"]),
        },
        "fingerprint": fp,
        "metrics": {
            "slope_per_day": (fp["linear_regression"] or {}).get("slope", 0.0) * 86_400_000,
            "decomposed": decomposition is not None,
            "seasonal_amplitude": (
                max(decomposition["seasonal"]) - min(decomposition["seasonal"]) if decomposition else None
            ),
            **{k: fp[k] for k in growth_keys},
        },
        "artifacts": {}
    }

    out_path = io.write_json(result, Path(args.outdir) / "01_time_series.json")
    result["artifacts"]["json"] = str(out_path)

    return result

if __name__ == "__main__":
    res = main()
    io.print_summary(res)
