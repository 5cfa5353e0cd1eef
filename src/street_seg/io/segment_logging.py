# street_seg/io/segment_logging.py
import json
import logging
import sys

from street_seg.app.hooks import NoopHooks


def _default_json_logger(name="street_seg", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SegmentLogging(NoopHooks):
    """
    Structured logs for street segment assembly.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        stream=None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level, stream=stream)
        self._assembled = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def assembly_start(self, path, *, qmode):
        if self.debug:
            self._emit(
                "DEBUG",
                "assembly_start",
                edges=len(path),
                qmode=str(qmode) if qmode else None,
            )

    def assembly_end(self, segment, *, edges: int, wall_ms: float):
        self._assembled += 1
        self._emit(
            "INFO",
            "segment_assembled",
            seq=self._assembled,
            qmode=str(segment.qmode) if segment.qmode else None,
            time_s=segment.time,
            edges=edges,
            walk_steps=len(segment.walk_steps),
            points=segment.geometry.length,
            wall_ms=round(wall_ms, 3),
        )

    def geometry_skipped(self, edge, *, index: int):
        if self.debug:
            self._emit("DEBUG", "geometry_skipped", index=index, edge_id=edge.edge_id)

    def error(self, path, *, exc: BaseException, **extra):
        self._emit(
            "ERROR",
            "assembly_error",
            edges=len(path),
            error=str(exc),
            error_type=type(exc).__name__,
            **extra,
        )
