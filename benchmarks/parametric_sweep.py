"""Parametric benchmark sweep: vary path depth, directory fan-out, and subtree size."""
from __future__ import annotations

import argparse
import gc
import time
import tracemalloc
from typing import Callable

from memns import CollisionPolicy, MemoryNamespace


def _measure(fn: Callable[[], None]) -> tuple[float, float]:
    """Run fn once, return (elapsed_sec, peak_kib)."""
    gc.collect()
    tracemalloc.start()
    t0 = time.perf_counter()
    fn()
    elapsed = time.perf_counter() - t0
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    gc.collect()
    return elapsed, peak / 1024.0


# ---------------------------------------------------------------------------
#  Resolve (vary depth)
# ---------------------------------------------------------------------------

def _resolve_deep(depth: int, lookups: int) -> None:
    mns = MemoryNamespace()
    path = "/" + "/".join(f"d{i}" for i in range(depth))
    mns.resolve(path, auto_create=True)
    for _ in range(lookups):
        mns.resolve(path)
    assert mns.resolve(path).full_path == path + "/"


# ---------------------------------------------------------------------------
#  Find (vary fan-out)
# ---------------------------------------------------------------------------

def _find_wide(fanout: int) -> None:
    mns = MemoryNamespace()
    for i in range(fanout):
        mns.change_directory(f"/d{i:05d}", auto_create=True)
        mns.touch("target")
    mns.change_directory("/")
    assert len(mns.find_exact("target", recursive=True)) == fanout


# ---------------------------------------------------------------------------
#  Cascade delete and move (vary subtree size)
# ---------------------------------------------------------------------------

def _delete_tree(width: int) -> None:
    mns = MemoryNamespace()
    for i in range(width):
        mns.change_directory(f"/root/a{i}/b", auto_create=True)
        mns.touch("leaf")
        mns.write_content("leaf", "x" * 64)
    mns.change_directory("/")
    mns.delete("/root")
    assert mns.stats()["node_count"] == 1


def _move_churn(count: int) -> None:
    mns = MemoryNamespace()
    mns.resolve("/a", auto_create=True)
    mns.resolve("/b", auto_create=True)
    mns.change_directory("/a")
    for i in range(count):
        mns.touch(f"f{i}")
    for i in range(count):
        mns.move(f"/a/f{i}", f"/b/f{i}", policy=CollisionPolicy.ABORT)
    assert len(mns.list_children("/b")) == count


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--scale", type=int, default=1, help="multiply every sweep point")
    args = parser.parse_args()
    s = args.scale

    sweeps: list[tuple[str, list[int], Callable[[int], None]]] = [
        ("resolve depth", [8, 64, 256], lambda n: _resolve_deep(n, 1000 * s)),
        ("find fan-out", [100 * s, 1000 * s, 5000 * s], _find_wide),
        ("delete width", [100 * s, 1000 * s, 5000 * s], _delete_tree),
        ("move count", [100 * s, 1000 * s, 5000 * s], _move_churn),
    ]
    print(f"{'case':<16}{'n':>8}{'seconds':>12}{'peak KiB':>12}")
    for label, points, fn in sweeps:
        for n in points:
            elapsed, peak = _measure(lambda: fn(n))
            print(f"{label:<16}{n:>8}{elapsed:>12.4f}{peak:>12.1f}")


if __name__ == "__main__":
    main()
