"""
Explicit context values threaded through drawing calls.

``GeometryContext`` identifies the alignment conditions under which surface
transforms are evaluated. ``RunContext`` carries run/event bookkeeping and is
created by the caller for each run instead of living in a global instance.

Usage
-----
    from trackvis.context import GeometryContext, RunContext

    run = RunContext()
    run.begin_run()
    for event in events:
        run.begin_event()
        ...
        run.record_draw(n_parameters)
    summary = run.end_run()
"""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class GeometryContext:
    """Alignment conditions for transform evaluation.

    Attributes
    ----------
    alignment : dict
        Maps detector element identifiers to aligned ``Transform3D`` objects
        that replace the nominal placement.
    """
    alignment: dict = field(default_factory=dict)


@dataclass
class RunContext:
    """Run and event counters for a batch of drawing calls.

    Attributes
    ----------
    run_number : int
        Incremented by :meth:`begin_run`; 0 before the first run.
    event_number : int
        Index of the current event within the run, -1 before the first event.
    n_drawn : int
        Number of parameter sets drawn in the current run.
    """
    run_number: int = 0
    event_number: int = -1
    n_drawn: int = 0
    _active: bool = field(default=False, repr=False)

    def begin_run(self) -> None:
        """Start a new run and reset the event bookkeeping."""
        if self._active:
            raise RuntimeError(f"Run {self.run_number} is still active")
        self.run_number += 1
        self.event_number = -1
        self.n_drawn = 0
        self._active = True
        logger.info("Begin of run %d", self.run_number)

    def begin_event(self) -> int:
        if not self._active:
            raise RuntimeError("begin_event() called outside of a run")
        self.event_number += 1
        return self.event_number

    def record_draw(self, n: int = 1) -> None:
        self.n_drawn += n

    def end_run(self) -> dict:
        """Close the run and return its summary."""
        if not self._active:
            raise RuntimeError("end_run() called without begin_run()")
        self._active = False
        summary = {
            'run': self.run_number,
            'events': self.event_number + 1,
            'drawn': self.n_drawn,
        }
        logger.info("End of run %d: %d events, %d parameter sets drawn",
                    summary['run'], summary['events'], summary['drawn'])
        return summary
