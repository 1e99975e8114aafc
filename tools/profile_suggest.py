# tools/profile_suggest.py
"""
Small profiling harness for AutocompleteEngine.suggest.
Usage:
  python tools/profile_suggest.py --seeds data/seeds.txt --iters 1000 --prefix pri

Without --seeds a synthetic vocabulary is generated. Measures cold queries
(cache cleared before each call) and warm ones (cache hits), then prints
mean/median/p90/max latency and a sample of suggestions.
"""
import argparse
import json
import random
import statistics
import string
import time
from pathlib import Path

from smart_autocomplete.core.engine import AutocompleteEngine
from smart_autocomplete.utils.config_manager import EngineConfig


def synthetic_vocab(n, seed=7):
    rng = random.Random(seed)
    words = set()
    while len(words) < n:
        size = rng.randint(3, 10)
        words.add("".join(rng.choice(string.ascii_lowercase) for _ in range(size)))
    return sorted(words)


def train(engine, rounds, seed=7):
    """Accept random vocabulary tokens so frequencies and graph edges exist."""
    rng = random.Random(seed)
    vocab = list(engine.index.all_tokens())
    for _ in range(rounds):
        engine.accept(rng.choice(vocab))


def benchmark(engine, queries, iterations, cold):
    times = []
    for _ in range(iterations):
        q = random.choice(queries)
        if cold:
            engine.session.cache.clear()
        t0 = time.perf_counter()
        _ = engine.suggest(q)
        times.append((time.perf_counter() - t0) * 1000.0)  # ms
    return times


def summarize(times):
    times_sorted = sorted(times)
    return {
        "count": len(times_sorted),
        "mean_ms": round(statistics.mean(times_sorted), 4),
        "median_ms": round(statistics.median(times_sorted), 4),
        "p90_ms": round(times_sorted[max(0, int(0.9 * len(times_sorted)) - 1)], 4),
        "max_ms": round(max(times_sorted), 4),
    }


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--seeds", type=str, default=None, help="seed dictionary file")
    parser.add_argument("--vocab", type=int, default=20000, help="synthetic vocabulary size")
    parser.add_argument("--train", type=int, default=2000, help="random acceptances before measuring")
    parser.add_argument("--iters", type=int, default=500, help="measured iterations")
    parser.add_argument("--prefix", type=str, default=None, help="query only this prefix")
    parser.add_argument("--substring", action="store_true", help="enable substring fallback")
    parser.add_argument("--out", type=str, default=None, help="write the summary as JSON")
    args = parser.parse_args()

    engine = AutocompleteEngine(config=EngineConfig(substring_search=args.substring))
    if args.seeds:
        engine.load_seeds(args.seeds)
    else:
        engine.add_tokens(synthetic_vocab(args.vocab))
    if len(engine.index) == 0:
        print("No vocabulary loaded.")
        return 1

    # training writes nothing to disk: the engine has no store paths
    train(engine, args.train)

    vocab = list(engine.index.all_tokens())
    queries = [args.prefix] if args.prefix else sorted({t[:2] for t in vocab} | {t[:3] for t in vocab})

    report = {
        "cold": summarize(benchmark(engine, queries, args.iters, cold=True)),
        "warm": summarize(benchmark(engine, queries, args.iters, cold=False)),
    }
    print("Profiling summary (ms):")
    for name, s in report.items():
        print(f"  {name}: {s}")

    if args.out:
        Path(args.out).write_text(json.dumps(report, indent=2))
        print(f"Saved profile summary to {args.out}")

    sample = args.prefix or queries[0]
    print("Sample suggest output:", [(r.text, round(r.score, 3)) for r in engine.suggest(sample)])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
