#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
import time
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from fracnet import GeneralUndiGraph, NormalUndiGraph


def build_graph(args: argparse.Namespace) -> NormalUndiGraph:
    """Generate or load the graph selected on the command line."""
    if args.family == "apollo":
        return NormalUndiGraph.from_apollo(args.generations)
    if args.family == "koch":
        return NormalUndiGraph.from_koch(args.generations, keep_parents=args.keep_parents)
    if args.family == "pseudofractal":
        return NormalUndiGraph.from_pseudofractal(args.generations)
    if args.family == "pseudo-ext":
        return NormalUndiGraph.from_pseudo_ext(args.bridges, args.generations)

    name = args.name or (args.konect if args.family == "konect" else Path(args.input).stem)
    if args.family == "konect":
        g = GeneralUndiGraph.from_konect(name, args.konect)
    else:
        g = GeneralUndiGraph.from_file(name, args.input)
    print(f"Loaded {name}: n={g.num_nodes():,}, m={g.num_edges():,}")
    if args.lcc:
        g = g.lcc()
        print(f"LCC: n={g.num_nodes():,}, m={g.num_edges():,}")
    return NormalUndiGraph.from_general(g)


def main() -> None:
    ap = argparse.ArgumentParser(description="Build a graph, export its edge list and Laplacian spectrum.")

    ap.add_argument("--family", default="apollo",
                    choices=["apollo", "koch", "pseudofractal", "pseudo-ext", "file", "konect"],
                    help="Generator family, or 'file'/'konect' to load an edge list.")
    ap.add_argument("--generations", type=int, default=3, help="Generations for synthetic families.")
    ap.add_argument("--bridges", type=int, default=2, help="Bridging nodes per edge for --family=pseudo-ext.")
    ap.add_argument("--keep-parents", action="store_true",
                    help="Koch only: keep parent triangles (classic Koch network).")

    ap.add_argument("--input", default=None, help="Edge-list path if --family=file.")
    ap.add_argument("--konect", default=None, help="KONECT internal name if --family=konect, e.g. subelj_euroroad.")
    ap.add_argument("--name", default=None, help="Graph name for loaded data (defaults to file stem / KONECT name).")
    ap.add_argument("--lcc", action="store_true", help="Restrict loaded graphs to their largest connected component.")

    ap.add_argument("--outputs-dir", default="outputs", help="Directory to save edge lists/CSV/figures.")
    ap.add_argument("--spectrum", action="store_true",
                    help="Compute the dense Laplacian spectrum (O(n^3); keep graphs small).")

    args = ap.parse_args()
    if args.family == "file" and not args.input:
        ap.error("--family=file requires --input")
    if args.family == "konect" and not args.konect:
        ap.error("--family=konect requires --konect")

    outputs_dir = Path(args.outputs_dir)
    (outputs_dir / "figures").mkdir(parents=True, exist_ok=True)

    t0 = time.time()
    g = build_graph(args)
    print(f"Built {g.name}: n={g.n:,}, m={g.m:,} in {time.time() - t0:.2f}s")

    edges_path = outputs_dir / f"{g.name}.txt"
    g.write(edges_path)

    degs = g.degrees()
    summary = {
        "name": g.name,
        "n": g.n,
        "m": g.m,
        "mean_degree": float(degs.mean()) if g.n else 0.0,
        "max_degree": int(degs.max()) if g.n else 0,
    }

    fig_path = None
    if args.spectrum and g.n:
        eig = np.linalg.eigvalsh(g.laplacian())
        summary["algebraic_connectivity"] = float(eig[1]) if g.n > 1 else 0.0
        summary["spectral_radius"] = float(eig[-1])
        pd.DataFrame({"eigenvalue": eig}).to_csv(outputs_dir / f"{g.name}_spectrum.csv", index=False)

        plt.figure()
        plt.hist(eig, bins=min(100, max(10, g.n // 10)))
        plt.xlabel(r"$\lambda$")
        plt.ylabel("count")
        plt.title(f"Laplacian spectrum of {g.name}")
        plt.tight_layout()
        fig_path = outputs_dir / "figures" / f"{g.name}_spectrum.png"
        plt.savefig(fig_path, dpi=300, bbox_inches="tight")
        plt.close()

    results = pd.DataFrame([summary])
    results_path = outputs_dir / "graph_summary.csv"
    results.to_csv(results_path, index=False)

    print("\nSaved:", edges_path)
    print("Saved:", results_path)
    if fig_path is not None:
        print("Saved figure:", fig_path)
    print(results.to_string(index=False))


if __name__ == "__main__":
    main()
