"""Compare observed and predicted false positive rates of standard and blocked filters.

    python examples/false_positive_report.py --n 102400 --c 21 --blocks 8 --runs 10
"""
import argparse
import logging

import numpy as np
import pyarrow.compute as pc

from algorithms.false_positive import optimal_hashers
from algorithms.fp_trial import run_trial, trials_table
from data_structures.blocked_bloom import BlockedBloom
from data_structures.standard_bloom import StandardBloom

logger = logging.getLogger("false_positive_report")


def main():
    p = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    p.add_argument("--n", type=int, default=100 * 1024, help="expected set size")
    p.add_argument("--c", type=int, default=21, help="bits per member")
    p.add_argument("--k", type=int, default=None, help="hash count (default: optimal for c)")
    p.add_argument("--blocks", type=int, default=8)
    p.add_argument("--runs", type=int, default=10)
    p.add_argument("--seed", type=int, default=None, help="seed for reproducible filters")
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper()),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    k = args.k or optimal_hashers(args.c)
    rng = np.random.default_rng(args.seed)
    results = [run_trial(StandardBloom(args.n, args.c, k, rng=rng)) for _ in range(args.runs)]
    results += [run_trial(BlockedBloom(args.n, args.c, k, args.blocks, rng=rng))
                for _ in range(args.runs)]

    table = trials_table(results)
    for name in ("standard", "blocked"):
        rows = table.filter(pc.equal(table['name'], name))
        if not rows.num_rows:
            continue
        logger.info("%s: mean observed rate %.7f over %d runs (expected %.7f)",
                    name, pc.mean(rows['observed_rate']).as_py(), rows.num_rows,
                    rows['expected_rate'][0].as_py())


if __name__ == "__main__":
    main()
