"""
Stage registry for PC-Outlier.

An orchestrator looks stages up by name and builds them from plain option
dictionaries, without importing their concrete classes. Registries are
built explicitly; nothing is registered at import time.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List

from pc_outlier.classifier import (
    STAGE_DESCRIPTION,
    STAGE_NAME,
    OutlierFilter,
)
from pc_outlier.config import OutlierConfig


@dataclass
class StageInfo:
    """Description of a registered stage.

    Attributes
    ----------
    name : str
        Stage name, e.g. "filters.outlier".
    description : str
        One-line description.
    factory : callable
        Called with keyword options, returns a stage instance.
    options : dict
        Option names mapped to their default values.
    """

    name: str
    description: str
    factory: Callable[..., Any]
    options: Dict[str, Any] = field(default_factory=dict)


class StageRegistry:
    """Named stage factories."""

    def __init__(self):
        self._stages: Dict[str, StageInfo] = {}

    def register(self, info: StageInfo) -> StageInfo:
        if info.name in self._stages:
            raise ValueError(f"Stage already registered: '{info.name}'")
        self._stages[info.name] = info
        return info

    def info(self, name: str) -> StageInfo:
        info = self._stages.get(name)
        if info is None:
            raise KeyError(f"No stage registered for name '{name}'")
        return info

    def create(self, name: str, **options) -> Any:
        """Instantiate stage ``name``, rejecting options it does not declare."""
        info = self.info(name)
        unknown = sorted(set(options) - set(info.options))
        if unknown:
            raise ValueError(f"Unknown options for '{name}': {', '.join(unknown)}")
        return info.factory(**options)

    def names(self) -> List[str]:
        return sorted(self._stages)

    def __contains__(self, name: str) -> bool:
        return name in self._stages


def _outlier_options() -> Dict[str, Any]:
    defaults = OutlierConfig()
    return {
        f.name: getattr(defaults, f.name)
        for f in fields(OutlierConfig)
        if f.name in ("method", "min_k", "radius", "mean_k", "multiplier", "label", "threads")
    }


def _create_outlier_filter(**options) -> OutlierFilter:
    return OutlierFilter(OutlierConfig(**options))


def default_registry() -> StageRegistry:
    """Return a new registry holding the outlier filter stage."""
    registry = StageRegistry()
    registry.register(
        StageInfo(
            name=STAGE_NAME,
            description=STAGE_DESCRIPTION,
            factory=_create_outlier_filter,
            options=_outlier_options(),
        )
    )
    return registry
