"""
Append-only collector for warnings and informational notices.

One collector belongs to one fit. Appends are serialized with a lock so
parallel workers can report without losing messages, and reporting never
interrupts the computation.
"""

from typing import List, Optional
import threading
import warnings

from ..exceptions import KCentroidWarning


class Diagnostics:
    """Accumulates advisory messages produced while building or fitting a model."""

    def __init__(self, verbose: int = 0, tag: Optional[str] = None):
        """
        Args:
            verbose: 0 records silently; >= 1 also prints info and emits warnings
            tag: Prefix used when printing
        """
        self.verbose = verbose
        self.tag = tag
        self._lock = threading.Lock()
        self._warnings: List[str] = []
        self._infos: List[str] = []

    def warn(self, msg: str) -> None:
        """Record an advisory warning."""
        with self._lock:
            self._warnings.append(msg)
        if self.verbose:
            warnings.warn(self._format(msg), KCentroidWarning, stacklevel=2)

    def info(self, msg: str) -> None:
        """Record an informational notice."""
        with self._lock:
            self._infos.append(msg)
        if self.verbose:
            print(self._format(msg))

    @property
    def has_warnings(self) -> bool:
        with self._lock:
            return len(self._warnings) > 0

    @property
    def warnings(self) -> List[str]:
        """Copy of the recorded warnings, in order."""
        with self._lock:
            return list(self._warnings)

    @property
    def infos(self) -> List[str]:
        """Copy of the recorded notices, in order."""
        with self._lock:
            return list(self._infos)

    def extend(self, other: 'Diagnostics') -> None:
        """Append another collector's messages without re-emitting them."""
        w, i = other.warnings, other.infos
        with self._lock:
            self._warnings.extend(w)
            self._infos.extend(i)

    def _format(self, msg: str) -> str:
        return f"[{self.tag}] {msg}" if self.tag else msg

    def __repr__(self) -> str:
        return f"Diagnostics(warnings={len(self._warnings)}, infos={len(self._infos)})"
