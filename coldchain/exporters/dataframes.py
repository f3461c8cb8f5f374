"""Tabular export of engine results.

Turns result models into pandas DataFrames for the reporting and CSV
export collaborators: one row per path, per flow, or per leg.
"""

from typing import List

import pandas as pd

from coldchain.models import NetworkFlowResult, PathLeg, PathResult, RouteSequence

PATH_COLUMNS = [
    'origin',
    'destination',
    'path',
    'hops',
    'distance_km',
    'time_hours',
    'cost',
    'cost_per_km',
    'max_spoilage_risk',
    'cumulative_spoilage_risk',
    'route_class',
]

FLOW_COLUMNS = [
    'source_id',
    'destination_id',
    'volume',
    'path',
    'distance_km',
    'time_hours',
    'cost',
    'max_spoilage_risk',
]

LEG_COLUMNS = [
    'step',
    'from_id',
    'to_id',
    'edge_type',
    'distance_km',
    'time_hours',
    'cost',
    'spoilage_risk',
    'cumulative_distance_km',
    'cumulative_time_hours',
    'cumulative_cost',
    'cumulative_spoilage_risk',
    'within_constraints',
]


def _path_label(path: List[str]) -> str:
    return " -> ".join(path)


def paths_to_dataframe(paths: List[PathResult]) -> pd.DataFrame:
    """
    One row per path.

    Args:
        paths: Path results (e.g. from all_shortest_paths)

    Returns:
        DataFrame with PATH_COLUMNS
    """
    rows = []
    for path in paths:
        cost_per_km = 0.0
        if path.total_distance_km > 0:
            cost_per_km = path.total_cost / path.total_distance_km
        rows.append({
            'origin': path.origin,
            'destination': path.destination,
            'path': _path_label(path.path),
            'hops': path.num_hops,
            'distance_km': path.total_distance_km,
            'time_hours': path.total_time_hours,
            'cost': path.total_cost,
            'cost_per_km': cost_per_km,
            'max_spoilage_risk': path.max_spoilage_risk,
            'cumulative_spoilage_risk': path.cumulative_spoilage_risk,
            'route_class': path.route_class,
        })
    return pd.DataFrame(rows, columns=PATH_COLUMNS)


def network_flow_to_dataframe(result: NetworkFlowResult) -> pd.DataFrame:
    """
    One row per producer -> retail flow.

    Args:
        result: Network flow result

    Returns:
        DataFrame with FLOW_COLUMNS
    """
    rows = [
        {
            'source_id': flow.source_id,
            'destination_id': flow.destination_id,
            'volume': flow.volume,
            'path': _path_label(flow.path.path),
            'distance_km': flow.path.total_distance_km,
            'time_hours': flow.path.total_time_hours,
            'cost': flow.path.total_cost,
            'max_spoilage_risk': flow.path.max_spoilage_risk,
        }
        for flow in result.flows
    ]
    return pd.DataFrame(rows, columns=FLOW_COLUMNS)


def legs_to_dataframe(legs: List[PathLeg]) -> pd.DataFrame:
    """
    One row per leg, numbered from 1.

    Args:
        legs: Legs of a path or sequence

    Returns:
        DataFrame with LEG_COLUMNS
    """
    rows = []
    for step, leg in enumerate(legs, start=1):
        row = leg.model_dump()
        row['step'] = step
        rows.append(row)
    return pd.DataFrame(rows, columns=LEG_COLUMNS)


def sequence_to_dataframe(sequence: RouteSequence) -> pd.DataFrame:
    """One row per leg of a greedy route sequence."""
    return legs_to_dataframe(sequence.legs)


def network_summary(result: NetworkFlowResult) -> pd.Series:
    """
    Network totals and efficiency components as a labelled Series.

    Args:
        result: Network flow result

    Returns:
        Series indexed by metric name
    """
    efficiency = result.efficiency
    return pd.Series({
        'reachable_pairs': result.reachable_pairs,
        'possible_pairs': result.possible_pairs,
        'coverage': result.coverage,
        'total_cost': result.total_cost,
        'total_time_hours': result.total_time_hours,
        'total_distance_km': result.total_distance_km,
        'total_volume': result.total_volume,
        'mean_spoilage_risk': result.mean_spoilage_risk,
        'quality_score': efficiency.quality_score,
        'cost_score': efficiency.cost_score,
        'time_score': efficiency.time_score,
        'utilization_score': efficiency.utilization_score,
        'network_efficiency': efficiency.score,
    })
