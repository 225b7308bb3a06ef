"""Benchmark helper for change tracking latency under simulated typing."""
from __future__ import annotations

import argparse
import random
import statistics
from dataclasses import dataclass
from time import perf_counter

from trackedit.model import doc_from_text
from trackedit.settings import TrackerSettings
from trackedit.tracking import ChangeTracker
from trackedit.transform import Transform

_WORDS = ("lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing", "elit")


@dataclass(slots=True)
class BenchmarkResult:
    label: str
    edits: int
    changes: int
    runtimes_ms: list[float]

    @property
    def mean_ms(self) -> float:
        return statistics.fmean(self.runtimes_ms)

    @property
    def p95_ms(self) -> float:
        if len(self.runtimes_ms) < 2:
            return self.runtimes_ms[0]
        return statistics.quantiles(self.runtimes_ms, n=20)[-1]


def _build_text(paragraphs: int, rng: random.Random) -> str:
    lines = [" ".join(rng.choice(_WORDS) for _ in range(40)) for _ in range(paragraphs)]
    return "\n".join(lines)


def _random_edit(tracker: ChangeTracker, rng: random.Random, authors: tuple[str, ...]) -> tuple[Transform, str]:
    document = tracker.doc
    index = rng.randrange(document.child_count)
    start = sum(document.child(i).node_size for i in range(index)) + 1
    size = document.child(index).content.size
    pos = start + rng.randint(0, size)
    transform = tracker.transform()
    roll = rng.random()
    if roll < 0.6 or size == 0:
        transform.insert_text(pos, rng.choice("abcdefgh "))
    elif roll < 0.9:
        end = min(pos + rng.randint(1, 3), start + size)
        if end > pos:
            transform.delete(pos, end)
    else:
        transform.split(pos)
    return transform, rng.choice(authors)


def run_benchmark(
    label: str,
    *,
    paragraphs: int,
    edits: int,
    authors: tuple[str, ...],
    check_invariants: bool,
    seed: int,
) -> BenchmarkResult:
    rng = random.Random(seed)
    tracker = ChangeTracker(
        doc_from_text(_build_text(paragraphs, rng)),
        authors[0],
        settings=TrackerSettings(check_invariants=check_invariants),
    )
    runtimes: list[float] = []
    for _ in range(edits):
        transform, author = _random_edit(tracker, rng, authors)
        started = perf_counter()
        tracker.apply(transform, author)
        runtimes.append((perf_counter() - started) * 1000)
    return BenchmarkResult(label=label, edits=edits, changes=len(tracker.changes), runtimes_ms=runtimes)


def main() -> None:
    parser = argparse.ArgumentParser(description="Measure on_edit_applied latency over random typing edits.")
    parser.add_argument("--paragraphs", type=int, default=50, help="Paragraphs in the starting document.")
    parser.add_argument("--edits", type=int, default=500, help="Edits applied per run.")
    parser.add_argument("--seed", type=int, default=7, help="Random seed for reproducible runs.")
    parser.add_argument(
        "--no-invariants",
        action="store_true",
        help="Skip the per-step change set invariant check.",
    )
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON results.")
    args = parser.parse_args()

    paragraphs = max(1, args.paragraphs)
    edits = max(1, args.edits)
    results = [
        run_benchmark(
            label,
            paragraphs=paragraphs,
            edits=edits,
            authors=authors,
            check_invariants=not args.no_invariants,
            seed=args.seed,
        )
        for label, authors in (("single author", ("x",)), ("two authors", ("x", "y")))
    ]

    if args.json:
        import json

        payload = [
            {
                "label": result.label,
                "edits": result.edits,
                "changes": result.changes,
                "mean_ms": result.mean_ms,
                "p95_ms": result.p95_ms,
                "max_ms": max(result.runtimes_ms),
            }
            for result in results
        ]
        print(json.dumps(payload, indent=2))
        return

    max_label = max(len(result.label) for result in results)
    header = f"{'Run':<{max_label}}  Edits  Changes  Mean (ms)  p95 (ms)  Max (ms)"
    print(header)
    print("-" * len(header))
    for result in results:
        print(
            f"{result.label:<{max_label}}  "
            f"{result.edits:>5}  "
            f"{result.changes:>7}  "
            f"{result.mean_ms:>9.3f}  "
            f"{result.p95_ms:>8.3f}  "
            f"{max(result.runtimes_ms):>8.3f}"
        )


if __name__ == "__main__":
    main()
