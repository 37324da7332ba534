"""
Convergence control for the assign/update/evaluate loop.

The loop stops in one of two terminal states:
- Converged: the absolute change in total cost fell below ``min_change``
- Exhausted: the iteration budget ``max_iter`` was used up
"""

from typing import Dict, Any, List
import math

from ..base.data_structures import IterationState


class ConvergenceController:
    """Tracks iteration count and cost delta and decides termination.

    The first recorded cost has no predecessor, so its delta is infinite and
    at least one full pass always runs before convergence can be declared.
    """

    def __init__(self, max_iter: int, min_change: float):
        """
        Args:
            max_iter: Maximum number of passes (>= 1)
            min_change: Absolute cost-delta threshold (> 0)
        """
        self.max_iter = max_iter
        self.min_change = min_change
        self.state = IterationState()
        self.history: List[Dict[str, Any]] = []
        self._stopped = False

    def reset(self) -> IterationState:
        """Return to the initial state."""
        self.state = IterationState()
        self.history = []
        self._stopped = False
        return self.state

    @property
    def stopped(self) -> bool:
        return self._stopped

    def record(self, cost: float) -> bool:
        """Feed the total cost of a completed pass.

        Args:
            cost: Total cost evaluated in this pass

        Returns:
            True if the loop must stop
        """
        if self._stopped:
            raise RuntimeError("Convergence loop has already terminated")

        state = self.state
        state.previous_cost = state.cost
        state.cost = float(cost)

        if state.previous_cost is None:
            state.delta = math.inf
        else:
            state.delta = abs(state.previous_cost - state.cost)

        self.history.append({
            'iteration': state.iteration,
            'cost': state.cost,
            'delta': state.delta
        })

        if state.delta < self.min_change:
            state.converged = True
            self._stopped = True
            return True

        state.iteration += 1
        if state.iteration >= self.max_iter:
            self._stopped = True
            return True

        return False
