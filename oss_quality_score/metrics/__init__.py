"""
Metric registry.

Each builtin metric module exposes a module-level ``METRIC`` MetricSpec.
"""

from importlib import import_module

from oss_quality_score.metrics.base import (
    MetricContext,
    MetricOutcome,
    MetricResult,
    MetricSpec,
    run_metric,
)

_BUILTIN_MODULES = [
    "oss_quality_score.metrics.license_compatibility",
    "oss_quality_score.metrics.responsiveness",
    "oss_quality_score.metrics.correctness",
    "oss_quality_score.metrics.ramp_up",
]


def _load_builtin_metric_specs() -> list[MetricSpec]:
    specs: list[MetricSpec] = []
    for module_path in _BUILTIN_MODULES:
        module = import_module(module_path)
        spec = getattr(module, "METRIC", None)
        if isinstance(spec, MetricSpec):
            specs.append(spec)
    return specs


def load_metric_specs() -> list[MetricSpec]:
    """Return builtin metric specs in pipeline order."""
    return _load_builtin_metric_specs()


def get_metric_spec(name: str) -> MetricSpec:
    """
    Look up a builtin metric by name.

    Raises:
        KeyError: If no metric has that name.
    """
    for spec in load_metric_specs():
        if spec.name == name:
            return spec
    raise KeyError(f"Unknown metric: {name}")


__all__ = [
    "MetricContext",
    "MetricOutcome",
    "MetricResult",
    "MetricSpec",
    "get_metric_spec",
    "load_metric_specs",
    "run_metric",
]
