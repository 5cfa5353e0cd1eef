# street_seg/runtime/registries.py
from collections.abc import Callable

from street_seg.app.protocols import StepGenerator
from street_seg.config.models import StepGeneratorStreetNameModel, StepGeneratorUnion
from street_seg.steps.generators import StreetNameStepGenerator

StepGeneratorFactory = Callable[[StepGeneratorUnion, dict], StepGenerator]

_step_generator_registry: dict[str, StepGeneratorFactory] = {}


def register_step_generator(kind: str):
    def deco(fn: StepGeneratorFactory):
        _step_generator_registry[kind] = fn
        return fn

    return deco


def make_step_generator(cfg: StepGeneratorUnion, *, deps: dict | None = None) -> StepGenerator:
    try:
        factory = _step_generator_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown step generator kind {cfg.kind!r}") from None
    return factory(cfg, deps or {})


@register_step_generator("street_name")
def _make_street_name(cfg: StepGeneratorStreetNameModel, deps):
    return StreetNameStepGenerator(
        continue_deg=cfg.continue_deg,
        slight_deg=cfg.slight_deg,
        hard_deg=cfg.hard_deg,
        uturn_deg=cfg.uturn_deg,
    )
