"""Scale helpers mapping aggregated counts onto radii, colours and legends."""

from .domain import LegendConfig, LegendEntry, ScaleDomain, compute_scale_domain, legend_entries
from .scales import LinearColorScale, SqrtScale

__all__ = [
    "LegendConfig",
    "LegendEntry",
    "LinearColorScale",
    "ScaleDomain",
    "SqrtScale",
    "compute_scale_domain",
    "legend_entries",
]
