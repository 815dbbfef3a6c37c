import sys
import os
import time
import argparse

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bridge_engine.algo.builder import run_trials

# ==========================================
# GLOBAL CONFIGURATION
# Grid shapes to compare. The first axis is the span direction.
# ==========================================
SHAPES = [
    (10, 10),
    (25, 25),
    (50, 50),
    (100, 100),
    (10, 10, 10),
    (20, 20, 20),
]

def summarize(shape, results):
    occupancy = np.array([r["occupancy"] for r in results])
    seconds = np.array([r["seconds"] for r in results])
    return {
        "shape": "x".join(map(str, shape)),
        "mean": occupancy.mean(),
        "std": occupancy.std(),
        "p05": np.percentile(occupancy, 5),
        "p95": np.percentile(occupancy, 95),
        "time": seconds.mean(),
    }

def run_benchmark():
    parser = argparse.ArgumentParser(description="Spanning Threshold Benchmark")
    parser.add_argument("--trials", type=int, default=30, help="Simulations per shape")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    args = parser.parse_args()

    print("=== SPANNING THRESHOLD BENCHMARK ===")
    print(f"Trials per shape: {args.trials}")
    print("-" * 50)

    print(f"\n{'SHAPE':<12} | {'MEAN':<8} | {'STD':<8} | {'P05':<8} | {'P95':<8} | {'TIME (s)':<10}")
    print("-" * 68)

    t0 = time.time()
    for shape in SHAPES:
        row = summarize(shape, run_trials(shape, args.trials, seed=args.seed))
        print(f"{row['shape']:<12} | {row['mean']:<8.4f} | {row['std']:<8.4f} | "
              f"{row['p05']:<8.4f} | {row['p95']:<8.4f} | {row['time']:<10.4f}")

    print(f"\nTotal: {time.time() - t0:.2f}s")

if __name__ == "__main__":
    run_benchmark()
