"""hashit.orchestrator

Runs one or every registered digest function over an input and collects
the outcomes into a ResultSet.

Each function call produces an explicit DigestResult: either a hex digest
or a FailureMarker carrying the failure message. A failing algorithm
never prevents the others from running. Only an unknown selector aborts
the call (UnsupportedAlgorithm), because that is a caller input error.
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union

from .errors import AlgorithmFailure, UnsupportedAlgorithm
from .registry import AlgorithmRegistry, NotFound, normalize_id

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "Error: "


@dataclass(frozen=True)
class FailureMarker:
    """Stands in for a digest when computing it raised."""

    reason: str

    def __str__(self) -> str:
        return FAILURE_PREFIX + self.reason


Outcome = Union[str, FailureMarker]


@dataclass(frozen=True)
class DigestResult:
    algorithm: str
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return not isinstance(self.outcome, FailureMarker)


class ResultSet(Mapping):
    """Read-only, insertion-ordered mapping of algorithm id -> outcome."""

    def __init__(self, results: Optional[List[DigestResult]] = None):
        self._entries: Dict[str, Outcome] = {}
        for r in results or []:
            self._entries[r.algorithm] = r.outcome

    def __getitem__(self, algorithm: str) -> Outcome:
        return self._entries[algorithm]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if isinstance(other, ResultSet):
            # order is part of the contract
            return list(self._entries.items()) == list(other._entries.items())
        return super().__eq__(other)

    __hash__ = None

    def failures(self) -> Dict[str, FailureMarker]:
        return {k: v for k, v in self._entries.items() if isinstance(v, FailureMarker)}

    def uppercased(self) -> "ResultSet":
        """Return a copy with every hex digest upper-cased.

        Failure markers are kept exactly as they were.
        """
        return ResultSet(
            [
                DigestResult(k, v if isinstance(v, FailureMarker) else v.upper())
                for k, v in self._entries.items()
            ]
        )

    def to_dict(self) -> Dict[str, str]:
        """Plain dict of strings; failures render as 'Error: <reason>'."""
        return {k: str(v) for k, v in self._entries.items()}

    def __repr__(self) -> str:
        return f"ResultSet({self._entries!r})"


class DigestOrchestrator:
    def __init__(self, registry: AlgorithmRegistry, workers: int = 1):
        self.registry = registry
        self.workers = max(1, int(workers or 1))

    def compute_one(self, algorithm: str, data: bytes) -> DigestResult:
        """Run one registered function and capture its outcome.

        The algorithm must already be resolvable; lookups of unknown ids are
        handled by `run`.
        """
        fn = self.registry.resolve(algorithm)
        if isinstance(fn, NotFound):
            raise UnsupportedAlgorithm(algorithm, self.registry.list_ids())
        start = time.perf_counter()
        try:
            digest = fn(data)
        except Exception as e:
            failure = AlgorithmFailure(algorithm, e)
            logger.warning("%s", failure)
            return DigestResult(algorithm, FailureMarker(str(failure)))
        logger.debug(
            "%s: %d byte digest in %.3fms",
            algorithm,
            len(digest),
            (time.perf_counter() - start) * 1000.0,
        )
        return DigestResult(algorithm, bytes(digest).hex())

    def run(
        self, data: bytes, selector: Optional[str] = None, uppercase: bool = False
    ) -> ResultSet:
        if selector is not None:
            if not isinstance(selector, str):
                raise UnsupportedAlgorithm(repr(selector), self.registry.list_ids())
            if isinstance(self.registry.resolve(selector), NotFound):
                raise UnsupportedAlgorithm(selector, self.registry.list_ids())
            results = [self.compute_one(normalize_id(selector), data)]
        else:
            results = self._run_all(data)

        result_set = ResultSet(results)
        if uppercase:
            result_set = result_set.uppercased()
        return result_set

    def _run_all(self, data: bytes) -> List[DigestResult]:
        ids = self.registry.list_ids()
        if self.workers <= 1 or len(ids) <= 1:
            return [self.compute_one(a, data) for a in ids]

        # results are gathered per algorithm and merged in sorted id order,
        # whatever order the futures complete in
        done: Dict[str, DigestResult] = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {executor.submit(self.compute_one, a, data): a for a in ids}
            for fut in concurrent.futures.as_completed(futures):
                r = fut.result()
                done[r.algorithm] = r
        return [done[a] for a in ids]

