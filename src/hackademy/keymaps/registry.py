"""Keymap registry: stores actions and bindings and resolves keystrokes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Literal, Mapping, Optional

from hackademy.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapConflictError(RuntimeError):
    """Raised when a new binding overlaps an existing one."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and single-stroke bindings per scope."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        # scope -> token -> binding ids
        self._index: Dict[str, Dict[str, list[str]]] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "scope": binding.scope},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)
            if not replace and binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in (*conflicts, self._bindings.get(binding.id)):
                if stale is not None:
                    self.unregister_binding(stale.id)

            self._bindings[binding.id] = binding
            bucket = self._index.setdefault(binding.scope, {})
            bucket.setdefault(binding.stroke.token, []).append(binding.id)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        ids = self._index.get(binding.scope, {}).get(binding.stroke.token, [])
        if binding_id in ids:
            ids.remove(binding_id)
        return binding

    def iter_bindings(self, scope: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if scope is None or binding.scope == scope:
                yield binding

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        conflicts: list[Binding] = []
        for existing_id in self._index.get(binding.scope, {}).get(
            binding.stroke.token, []
        ):
            if existing_id == binding.id:
                continue
            existing = self._bindings[existing_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def resolve(
        self,
        scope: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"scope": scope, "token": token},
        ) as handle:
            candidates = [
                self._bindings[binding_id]
                for binding_id in self._index.get(scope, {}).get(token, [])
            ]
            allowed = [binding for binding in candidates if binding.allows(ctx)]
            if not allowed:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")
            allowed.sort(key=lambda b: (-b.priority, b.id))
            chosen = allowed[0]
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", chosen.id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(
                    binding=chosen, action=self.get_action(chosen.action_id)
                ),
            )


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Two bindings on one stroke overlap unless some flag disagrees."""

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return True


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "ResolutionMatch",
    "ResolutionResult",
]
