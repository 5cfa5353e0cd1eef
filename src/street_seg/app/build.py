# street_seg/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from street_seg.app.assembler import SegmentAssembler
from street_seg.app.hooks import AssemblyHooks, NoopHooks
from street_seg.app.protocols import StepGenerator
from street_seg.config.models import SegmentsModel
from street_seg.io.segment_logging import SegmentLogging  # JSON logs
from street_seg.runtime.registries import make_step_generator


@dataclass
class App:
    config: SegmentsModel
    hooks: AssemblyHooks
    step_generator: StepGenerator
    assembler: SegmentAssembler


def build(
    cfg: SegmentsModel | Mapping | None = None,
    *,
    use_logging: bool = True,
    step_generator: StepGenerator | None = None,
    log_stream=None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = SegmentsModel()
    else:
        model = cfg if isinstance(cfg, SegmentsModel) else SegmentsModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SegmentLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            stream=log_stream,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Walk-step collaborator (injectable, e.g. a real itinerary generator)
    steps = step_generator or make_step_generator(model.steps)

    # 3) Assembler
    assembler = SegmentAssembler(
        steps,
        tolerance_deg=model.geometry.join_tolerance_deg,
        on_discontinuity=model.geometry.on_discontinuity,
        hooks=hooks,
    )
    return App(model, hooks, steps, assembler)
