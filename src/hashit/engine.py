"""Public entry points of the digest engine.

HashEngine owns one frozen AlgorithmRegistry and the orchestrator that
runs it. The module-level functions use a default engine that is built
on first use and never modified afterwards.
"""

from __future__ import annotations

import functools
import logging
from typing import List, Optional, Union

from .orchestrator import DigestOrchestrator, ResultSet
from .registry import AlgorithmRegistry, build_default_registry
from .validation import require_valid_input

logger = logging.getLogger(__name__)


class HashEngine:
    def __init__(self, registry: Optional[AlgorithmRegistry] = None, workers: int = 1):
        if registry is None:
            registry = build_default_registry()
        elif not registry.frozen:
            registry.freeze()
        self.registry = registry
        self.orchestrator = DigestOrchestrator(registry, workers=workers)

    def list_supported_algorithms(self) -> List[str]:
        return self.registry.list_ids()

    def compute_digests(
        self,
        data: Union[str, bytes],
        selector: Optional[str] = None,
        uppercase: bool = False,
    ) -> ResultSet:
        """Digest `data` with one algorithm (`selector`) or with all of them.

        Raises InvalidInput for empty input and UnsupportedAlgorithm for an
        unknown selector. Failures inside individual algorithms are returned
        as FailureMarker entries.
        """
        payload = require_valid_input(data)
        logger.debug(
            "hashing %d bytes with %s", len(payload), selector or "all algorithms"
        )
        return self.orchestrator.run(payload, selector=selector, uppercase=uppercase)

    def __repr__(self) -> str:
        return f"HashEngine({self.registry!r}, workers={self.orchestrator.workers})"


@functools.lru_cache(maxsize=None)
def default_engine() -> HashEngine:
    return HashEngine()


def list_supported_algorithms() -> List[str]:
    return default_engine().list_supported_algorithms()


def compute_digests(
    data: Union[str, bytes],
    selector: Optional[str] = None,
    uppercase: bool = False,
) -> ResultSet:
    return default_engine().compute_digests(data, selector=selector, uppercase=uppercase)
