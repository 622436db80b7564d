"""
Runs the sequence of probe attempts against a resolved target.
"""
from __future__ import annotations
import itertools
import logging
import time
from typing import Callable, Iterable, Optional

from .models import ProbeOutcome, ProbePlan, ResolvedAddress, RunnerState
from .network import tcp_probe

logger = logging.getLogger(__name__)

ProbeFunc = Callable[[ResolvedAddress, float], ProbeOutcome]


class ProbeRunner:
    """Makes one timed connection attempt per iteration, pausing between attempts."""

    def __init__(
        self,
        target: ResolvedAddress,
        plan: ProbePlan,
        probe: ProbeFunc = tcp_probe,
        sleep: Callable[[float], None] = time.sleep,
        on_outcome: Optional[Callable[[ProbeOutcome], None]] = None,
    ):
        self.target = target
        self.plan = plan
        self.probe = probe
        self.sleep = sleep
        self.on_outcome = on_outcome or self._print_outcome
        self.state = RunnerState.ATTEMPT_PENDING
        self.attempts = 0

    @staticmethod
    def _print_outcome(outcome: ProbeOutcome):
        print(outcome.render(), flush=True)

    def _attempt_indices(self) -> Iterable[int]:
        if self.plan.is_unbounded:
            return itertools.count()
        return range(self.plan.count)

    def _is_last(self, index: int) -> bool:
        return not self.plan.is_unbounded and index == self.plan.count - 1

    def run(self):
        """
        Probes the target until the plan is exhausted.

        For an unbounded plan this only returns if the process is
        interrupted.
        """
        logger.info(
            "Probing %s (count=%s, interval=%ss, timeout=%ss)",
            self.target,
            "forever" if self.plan.is_unbounded else self.plan.count,
            self.plan.interval,
            self.plan.timeout,
        )
        for index in self._attempt_indices():
            outcome = self.probe(self.target, self.plan.timeout)
            self.attempts += 1
            self.on_outcome(outcome)
            if self._is_last(index):
                break
            self.sleep(self.plan.interval)
        self.state = RunnerState.DONE
        logger.info("Finished after %d attempt(s)", self.attempts)
