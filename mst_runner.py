"""
CLI to run minimum-spanning-tree experiments across seeds.

Reads experiments/mst_experiments.yml, builds each experiment's graph
(explicit labelled graph or random point cloud), runs the Prim engine and
writes per-run and per-experiment summaries to CSV.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple
import csv
from concurrent.futures import ProcessPoolExecutor, as_completed
import time

from adjacency_list_graph import AdjacencyListGraph
from algorithms import SpanningTree
from points import create_complete_graph, sample_points
from prim_engine import PrimEngine, spans

EXPERIMENT_KINDS = ("graph", "points")

RESULT_FIELDS = [
    "experiment",
    "kind",
    "seed",
    "vertices",
    "mst_edges",
    "cost",
    "spanning",
    "duration_sec",
]


@dataclass(frozen=True)
class ExperimentConfig:
    name: str
    kind: str
    vertices: Tuple[str, ...] = ()
    edges: Tuple[Tuple[str, str, Optional[float]], ...] = ()
    points: int = 0
    width: float = 100.0
    height: float = 100.0


@dataclass(frozen=True)
class Config:
    seed: int
    seed_count: int
    prioritize_alphabetically: bool
    experiments: Sequence[ExperimentConfig]


def load_config(path: Path) -> Config:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text()) or {}
    experiments = [_parse_experiment(exp) for exp in data.get("experiments", [])]
    seed_count = int(data.get("seed_count", 1))
    if seed_count < 1:
        raise ValueError("seed_count must be at least 1")
    return Config(
        seed=int(data.get("seed", 0)),
        seed_count=seed_count,
        prioritize_alphabetically=bool(data.get("prioritize_alphabetically", False)),
        experiments=experiments,
    )


def _parse_experiment(exp: Mapping[str, object]) -> ExperimentConfig:
    if not isinstance(exp, Mapping) or "name" not in exp:
        raise ValueError(f"Experiment entry {exp!r} must be a mapping with a 'name'")
    name = str(exp["name"])
    kind = str(exp.get("kind", "graph"))
    if kind not in EXPERIMENT_KINDS:
        raise ValueError(f"Unknown experiment kind '{kind}' for experiment '{name}'")

    if kind == "points":
        if "points" not in exp:
            raise ValueError(f"Points experiment '{name}' requires 'points'")
        count = int(exp["points"])  # type: ignore[arg-type]
        if count < 0:
            raise ValueError(f"Points experiment '{name}' requires points >= 0, got {count}")
        width = float(exp.get("width", 100.0))  # type: ignore[arg-type]
        height = float(exp.get("height", 100.0))  # type: ignore[arg-type]
        if width <= 0 or height <= 0:
            raise ValueError(f"Points experiment '{name}' requires positive width and height")
        return ExperimentConfig(name=name, kind=kind, points=count, width=width, height=height)

    labels = tuple(str(v) for v in exp.get("vertices", []))  # type: ignore[union-attr]
    if len(set(labels)) != len(labels):
        raise ValueError(f"Graph experiment '{name}' has duplicate vertex labels")
    edges: List[Tuple[str, str, Optional[float]]] = []
    for raw in exp.get("edges", []):  # type: ignore[union-attr]
        if not isinstance(raw, (list, tuple)) or len(raw) != 3:
            raise ValueError(f"Edge {raw!r} in '{name}' must be [source, destination, weight]")
        src, dst, weight = str(raw[0]), str(raw[1]), raw[2]
        if src not in labels or dst not in labels:
            raise ValueError(f"Edge {src}-{dst} in '{name}' references an unknown vertex")
        edges.append((src, dst, None if weight is None else float(weight)))
    return ExperimentConfig(name=name, kind=kind, vertices=labels, edges=tuple(edges))


def build_graph(exp: ExperimentConfig) -> AdjacencyListGraph[str]:
    """Labelled graph of a 'graph' experiment; every edge is undirected."""
    graph: AdjacencyListGraph[str] = AdjacencyListGraph()
    by_label = {label: graph.create_vertex(label) for label in exp.vertices}
    for src, dst, weight in exp.edges:
        graph.add_undirected_edge(by_label[src], by_label[dst], weight)
    return graph


def run_experiments(
    config_path: Path,
    results_csv: Path | None = None,
    aggregates_csv: Path | None = None,
    max_workers: int | None = None,
    use_processes: bool = False,
) -> List[Dict[str, object]]:
    cfg = load_config(config_path)
    start = time.time()

    existing_runs = load_results_csv(results_csv) if results_csv else []
    seen_keys: Set[Tuple[str, Optional[int]]] = {
        (str(r.get("experiment")), r.get("seed")) for r in existing_runs  # type: ignore[misc]
    }

    tasks: List[Tuple[ExperimentConfig, Optional[int]]] = []
    for exp in cfg.experiments:
        seeds: List[Optional[int]]
        if exp.kind == "points":
            seeds = [cfg.seed + offset for offset in range(cfg.seed_count)]
        else:
            seeds = [None]
        for seed in seeds:
            if (exp.name, seed) in seen_keys:
                continue
            tasks.append((exp, seed))

    print(f"[mst] queued {len(tasks)} new tasks (existing runs: {len(seen_keys)})")

    new_results: List[Dict[str, object]] = []
    completed: Set[Tuple[str, Optional[int]]] = set()
    if tasks:
        if use_processes:
            try:
                with ProcessPoolExecutor(max_workers=max_workers) as executor:
                    future_to_task = {
                        executor.submit(
                            _run_task, asdict(exp), seed, cfg.prioritize_alphabetically
                        ): (exp.name, seed)
                        for exp, seed in tasks
                    }
                    for future in as_completed(future_to_task):
                        exp_name, seed = future_to_task[future]
                        try:
                            res = future.result()
                            new_results.append(res)
                            completed.add((exp_name, seed))
                            if results_csv:
                                append_result_row(results_csv, res)
                            print(f"[mst] completed experiment={exp_name} seed={seed} cost={res['cost']:.4f}")
                        except Exception as exc:
                            print(f"[mst] failed experiment={exp_name} seed={seed}: {exc}")
            except (PermissionError, NotImplementedError, OSError) as exc:
                print(f"[mst] process pool unavailable ({exc}), falling back to sequential execution")
                use_processes = False
        else:
            print("[mst] using sequential execution")

        if not use_processes:
            for exp, seed in tasks:
                # Runs the pool finished before it went away are kept as-is.
                if (exp.name, seed) in completed:
                    continue
                res = _run_task(asdict(exp), seed, cfg.prioritize_alphabetically)
                new_results.append(res)
                if results_csv:
                    append_result_row(results_csv, res)
                print(f"[mst] completed experiment={exp.name} seed={seed} cost={res['cost']:.4f}")

    results = existing_runs + new_results

    if aggregates_csv:
        write_aggregates_csv(aggregate_by_experiment(results), aggregates_csv)

    elapsed = time.time() - start
    print(f"[mst] completed {len(results)} total runs in {elapsed:.2f}s")
    return results


def _run_task(exp_dict: Dict[str, object], seed: Optional[int], prioritize_alphabetically: bool) -> Dict[str, object]:
    start_run = time.time()
    exp = ExperimentConfig(
        name=str(exp_dict["name"]),
        kind=str(exp_dict["kind"]),
        vertices=tuple(exp_dict["vertices"]),  # type: ignore[arg-type]
        edges=tuple(tuple(e) for e in exp_dict["edges"]),  # type: ignore[union-attr,misc]
        points=int(exp_dict["points"]),  # type: ignore[arg-type]
        width=float(exp_dict["width"]),  # type: ignore[arg-type]
        height=float(exp_dict["height"]),  # type: ignore[arg-type]
    )
    res = _run_single(exp, seed, prioritize_alphabetically)
    res["duration_sec"] = time.time() - start_run
    return res


def _run_single(exp: ExperimentConfig, seed: Optional[int], prioritize_alphabetically: bool) -> Dict[str, object]:
    engine = PrimEngine(should_prioritize_alphabetically=prioritize_alphabetically)
    if exp.kind == "points":
        points = sample_points(exp.points, seed=seed or 0, width=exp.width, height=exp.height)
        graph = create_complete_graph(points)
    else:
        graph = build_graph(exp)
    result: SpanningTree = engine.produce_minimum_spanning_tree(graph)

    return {
        "experiment": exp.name,
        "kind": exp.kind,
        "seed": seed,
        "vertices": len(graph.vertices),
        "mst_edges": len(result.mst.undirected_edges()),
        "cost": result.cost,
        "spanning": spans(graph, result.mst),
    }


def aggregate_by_experiment(results: Iterable[Mapping[str, object]]) -> List[Dict[str, object]]:
    """
    Average cost, tree size and duration per experiment across seeds.
    """
    accum: Dict[str, Dict[str, float]] = {}
    counts: Dict[str, int] = {}
    all_spanning: Dict[str, bool] = {}

    for res in results:
        name = str(res["experiment"])
        counts[name] = counts.get(name, 0) + 1
        bucket = accum.setdefault(name, {"cost_sum": 0.0, "mst_edges_sum": 0.0, "duration_sum": 0.0})
        bucket["cost_sum"] += float(res.get("cost", 0.0))  # type: ignore[arg-type]
        bucket["mst_edges_sum"] += float(res.get("mst_edges", 0))  # type: ignore[arg-type]
        bucket["duration_sum"] += float(res.get("duration_sec", 0.0))  # type: ignore[arg-type]
        all_spanning[name] = all_spanning.get(name, True) and bool(res.get("spanning", False))

    aggregated_rows: List[Dict[str, object]] = []
    for name, sums in accum.items():
        n = counts[name]
        aggregated_rows.append(
            {
                "experiment": name,
                "runs": n,
                "avg_cost": sums["cost_sum"] / n,
                "avg_mst_edges": sums["mst_edges_sum"] / n,
                "avg_duration_sec": sums["duration_sum"] / n,
                "all_spanning": all_spanning[name],
            }
        )
    return aggregated_rows


def load_results_csv(path: Path | None) -> List[Dict[str, object]]:
    if path is None or not path.exists():
        return []
    with path.open() as f:
        reader = csv.DictReader(f)
        rows: List[Dict[str, object]] = []
        for raw in reader:
            row: Dict[str, object] = dict(raw)
            # Normalize fields so resume keys and aggregation match fresh runs.
            row["seed"] = int(raw["seed"]) if raw.get("seed") not in (None, "") else None
            for key in ("vertices", "mst_edges"):
                if raw.get(key) not in (None, ""):
                    row[key] = int(raw[key])
            for key in ("cost", "duration_sec"):
                if raw.get(key) not in (None, ""):
                    row[key] = float(raw[key])
            row["spanning"] = raw.get("spanning") == "True"
            rows.append(row)
        return rows


def append_result_row(path: Path, res: Mapping[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not path.exists()
    with path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
        if write_header:
            writer.writeheader()
        writer.writerow({key: res.get(key) for key in RESULT_FIELDS})


def write_results_csv(results: Iterable[Mapping[str, object]], path: Path) -> None:
    """
    Write per-run results to CSV for downstream analysis.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
        writer.writeheader()
        for res in results:
            writer.writerow({key: res.get(key) for key in RESULT_FIELDS})


def write_aggregates_csv(aggregated: Iterable[Mapping[str, object]], path: Path) -> None:
    fieldnames = ["experiment", "runs", "avg_cost", "avg_mst_edges", "avg_duration_sec", "all_spanning"]
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in aggregated:
            writer.writerow({key: row.get(key) for key in fieldnames})


def main() -> None:
    config_path = Path(__file__).parent / "experiments" / "mst_experiments.yml"
    out_dir = Path(__file__).parent / "experiments" / "results"
    results_csv = out_dir / "mst_runs.csv"
    aggregates_csv = out_dir / "mst_aggregates.csv"

    results = run_experiments(config_path, results_csv=results_csv, aggregates_csv=aggregates_csv)
    for res in results:
        print(res)
    print("Aggregated by experiment:", aggregate_by_experiment(results))
    print(f"Wrote runs to {results_csv} and aggregates to {aggregates_csv}")


if __name__ == "__main__":
    main()
