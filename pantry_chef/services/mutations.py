"""
Optimistic list state for API clients.

Every change is applied locally at once and tracked as a Mutation that is
PENDING until the server answers. Reconciliation rules:

  commit  -> COMMITTED. If no later mutation touched the same key, the
             server's view replaces the optimistic value. Otherwise the
             next pending mutation for that key rebases onto the server view.
  fail    -> FAILED. If a later mutation for the key is still pending it
             inherits this mutation's pre-image; if a later one already
             committed nothing changes; otherwise the pre-image is restored.

Only PENDING mutations may transition. Settled mutations leave the log once
no earlier pending mutation on their key remains.
"""

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

from pantry_chef.exceptions import PantryChefError

logger = logging.getLogger(__name__)

_MISSING = object()


class InvalidTransitionError(PantryChefError):
    pass


class MutationState(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    FAILED = "failed"


class MutationKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class Mutation:
    seq: int
    kind: MutationKind
    key: Any
    value: Any = None
    previous: Any = _MISSING
    state: MutationState = MutationState.PENDING
    error: str | None = None

    @property
    def had_previous(self) -> bool:
        return self.previous is not _MISSING


@dataclass
class OptimisticList:
    key: Callable[[Any], Any] = field(default=lambda item: item["id"])
    _items: dict = field(default_factory=dict)
    _log: list = field(default_factory=list)
    _seq: Any = field(default_factory=itertools.count)

    @classmethod
    def from_items(cls, items: Iterable, key: Callable[[Any], Any] | None = None) -> "OptimisticList":
        state = cls(key=key) if key else cls()
        for item in items:
            state._items[state.key(item)] = item
        return state

    @property
    def items(self) -> list:
        return list(self._items.values())

    def get(self, key, default=None):
        return self._items.get(key, default)

    @property
    def pending(self) -> list[Mutation]:
        return [m for m in self._log if m.state == MutationState.PENDING]

    @property
    def log(self) -> list[Mutation]:
        return list(self._log)

    # ── Local application ────────────────────────────────────────────

    def _set(self, key, value, prepend: bool = False) -> None:
        if prepend and key not in self._items:
            self._items = {key: value, **self._items}
        else:
            self._items[key] = value

    def _restore(self, key, previous) -> None:
        if previous is _MISSING:
            self._items.pop(key, None)
        else:
            self._items[key] = previous

    def begin(self, kind: MutationKind, key, value=None) -> Mutation:
        """Apply a change locally and start tracking it."""
        kind = MutationKind(kind)
        mutation = Mutation(
            seq=next(self._seq),
            kind=kind,
            key=key,
            value=value,
            previous=self._items.get(key, _MISSING),
        )
        if kind == MutationKind.DELETE:
            self._items.pop(key, None)
        else:
            self._set(key, value, prepend=kind == MutationKind.CREATE)
        self._log.append(mutation)
        return mutation

    def create(self, value) -> Mutation:
        return self.begin(MutationKind.CREATE, self.key(value), value)

    def update(self, value) -> Mutation:
        return self.begin(MutationKind.UPDATE, self.key(value), value)

    def delete(self, key) -> Mutation:
        return self.begin(MutationKind.DELETE, key)

    # ── Reconciliation ───────────────────────────────────────────────

    def _later(self, mutation: Mutation) -> list[Mutation]:
        return [m for m in self._log if m.key == mutation.key and m.seq > mutation.seq]

    def _prune(self) -> None:
        """Forget settled mutations that no earlier pending one on their key can reach."""
        oldest_pending = {}
        for m in self._log:
            if m.state == MutationState.PENDING:
                oldest_pending.setdefault(m.key, m.seq)
        self._log = [
            m for m in self._log
            if m.state == MutationState.PENDING or oldest_pending.get(m.key, m.seq) < m.seq
        ]

    @staticmethod
    def _check_pending(mutation: Mutation) -> None:
        if mutation.state != MutationState.PENDING:
            raise InvalidTransitionError(
                f"Mutation {mutation.seq} is already {mutation.state.value}"
            )

    def commit(self, mutation: Mutation, server_value=None) -> None:
        self._check_pending(mutation)
        mutation.state = MutationState.COMMITTED

        confirmed = _MISSING if mutation.kind == MutationKind.DELETE else (
            mutation.value if server_value is None else server_value
        )
        later = self._later(mutation)
        if later:
            for m in later:
                if m.state == MutationState.PENDING:
                    m.previous = confirmed
                    break
        elif confirmed is not _MISSING and self.key(confirmed) != mutation.key:
            # Server assigned a different id to a locally created item
            self._items = {
                (self.key(confirmed) if k == mutation.key else k): (confirmed if k == mutation.key else v)
                for k, v in self._items.items()
            }
        else:
            self._restore(mutation.key, confirmed)
        self._prune()

    def fail(self, mutation: Mutation, error: str | None = None) -> None:
        self._check_pending(mutation)
        mutation.state = MutationState.FAILED
        mutation.error = error
        logger.warning(f"Mutation {mutation.seq} ({mutation.kind.value} {mutation.key}) failed: {error}")

        later = self._later(mutation)
        next_pending = next((m for m in later if m.state == MutationState.PENDING), None)
        if next_pending is not None:
            next_pending.previous = mutation.previous
        elif not any(m.state == MutationState.COMMITTED for m in later):
            self._restore(mutation.key, mutation.previous)
        self._prune()
