from collections import deque
from typing import Dict, Set

from bridge_engine.core import keys
from bridge_engine.core.grid import Orthotope


class ClusterAnalyzer:
    @staticmethod
    def label(grid: Orthotope) -> Dict[str, int]:
        """
        Labels every occupied cell with the id of its connected cluster.
        Ids are assigned 0, 1, ... in key order of the first cell found.
        """
        labels: Dict[str, int] = {}
        next_id = 0

        for seed in sorted(grid.occupied):
            if seed in labels:
                continue

            labels[seed] = next_id
            queue = deque([seed])
            while queue:
                key = queue.popleft()
                for n in grid.occupied_neighbors(*keys.decode(key)):
                    nkey = keys.encode(n)
                    if nkey not in labels:
                        labels[nkey] = next_id
                        queue.append(nkey)
            next_id += 1

        return labels

    @staticmethod
    def spanning_clusters(grid: Orthotope, labels: Dict[str, int] = None) -> Set[int]:
        """Ids of clusters touching both faces of the first axis."""
        if labels is None:
            labels = ClusterAnalyzer.label(grid)
        if not grid.lengths:
            return set()

        right_edge = grid.lengths[0] - 1
        left, right = set(), set()
        for key, cluster in labels.items():
            x = keys.decode(key)[0]
            if x == 0:
                left.add(cluster)
            if x == right_edge:
                right.add(cluster)
        return left & right

    @staticmethod
    def spanning_cells(grid: Orthotope) -> Set[str]:
        labels = ClusterAnalyzer.label(grid)
        spanning = ClusterAnalyzer.spanning_clusters(grid, labels)
        return {key for key, cluster in labels.items() if cluster in spanning}

    @staticmethod
    def calculate_stats(grid: Orthotope):
        labels = ClusterAnalyzer.label(grid)

        sizes: Dict[int, int] = {}
        for cluster in labels.values():
            sizes[cluster] = sizes.get(cluster, 0) + 1

        spanning = ClusterAnalyzer.spanning_clusters(grid, labels)
        return {
            "cells": grid.cell_count,
            "occupied": grid.occupied_count,
            "empty": grid.empty_count,
            "occupancy": grid.occupancy,
            "clusters": len(sizes),
            "largest_cluster": max(sizes.values()) if sizes else 0,
            "spanning_clusters": len(spanning),
            "spanning": bool(spanning),
        }
