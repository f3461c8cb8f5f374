"""Export engine results as pandas tables."""

from .dataframes import (
    PATH_COLUMNS,
    FLOW_COLUMNS,
    LEG_COLUMNS,
    paths_to_dataframe,
    network_flow_to_dataframe,
    legs_to_dataframe,
    sequence_to_dataframe,
    network_summary,
)

__all__ = [
    'PATH_COLUMNS',
    'FLOW_COLUMNS',
    'LEG_COLUMNS',
    'paths_to_dataframe',
    'network_flow_to_dataframe',
    'legs_to_dataframe',
    'sequence_to_dataframe',
    'network_summary',
]
