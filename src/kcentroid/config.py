"""
Package-wide defaults.

Everything here can be overridden per estimator through constructor
arguments; the environment variable only changes the default.
"""

import os

import torch

DEFAULT_MAX_ITER = 100
DEFAULT_MIN_CHANGE = 0.005
DEFAULT_RANDOM_STATE = 42
DEFAULT_EMPTY_CLUSTER = 'freeze'
DEFAULT_DTYPE = torch.float64

EMPTY_CLUSTER_POLICIES = ('freeze', 'farthest', 'error')


def _min_execution_units_from_env() -> int:
    """Resolve the parallel core requirement from env or default."""
    env = os.getenv("KCENTROID_MIN_EXECUTION_UNITS", "4")
    try:
        return max(1, int(env))
    except ValueError:
        return 4


MIN_EXECUTION_UNITS = _min_execution_units_from_env()
