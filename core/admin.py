"""
core/admin.py — Settings panel state for Typing Taro.

The panel lets an operator choose which stage groups are played and the
fall speed (1–5). It holds only selection state; renderer/admin.py draws
it and core/game.py routes clicks to it. Every change is returned as a
SessionConfig so the caller can persist it and hand it to the controller.
"""

from __future__ import annotations

from core.config import SessionConfig
from settings import SPEED_MIN, SPEED_MAX
from stages.catalog import STAGE_GROUPS, groups_for_stages, stages_for_groups


class AdminPanel:
    """Stage-group and speed selection.

    Attributes:
        selected: Ids of the selected stage groups, in STAGE_GROUPS order.
        speed:    Integer fall speed in [SPEED_MIN, SPEED_MAX].
    """

    def __init__(self, config: SessionConfig) -> None:
        self.selected: list[str] = groups_for_stages(config.stage_order)
        self.speed: int = max(SPEED_MIN, min(SPEED_MAX, int(config.speed)))

    def _ordered(self, ids: set[str]) -> list[str]:
        return [gid for gid, _, _ in STAGE_GROUPS if gid in ids]

    def toggle_group(self, group_id: str) -> SessionConfig:
        """Select or deselect one group."""
        ids = set(self.selected)
        if group_id in ids:
            ids.discard(group_id)
        elif any(gid == group_id for gid, _, _ in STAGE_GROUPS):
            ids.add(group_id)
        self.selected = self._ordered(ids)
        return self.to_config()

    def select_all(self) -> SessionConfig:
        self.selected = [gid for gid, _, _ in STAGE_GROUPS]
        return self.to_config()

    def clear_all(self) -> SessionConfig:
        self.selected = []
        return self.to_config()

    def set_speed(self, speed: int) -> SessionConfig:
        self.speed = max(SPEED_MIN, min(SPEED_MAX, int(speed)))
        return self.to_config()

    def is_selected(self, group_id: str) -> bool:
        return group_id in self.selected

    def summary(self) -> str:
        """Human-readable list of the selected groups, or "none"."""
        labels = [label for gid, label, _ in STAGE_GROUPS if gid in self.selected]
        return ", ".join(labels) if labels else "none"

    def to_config(self) -> SessionConfig:
        """Selected stages (ascending) and speed as a SessionConfig."""
        return SessionConfig(tuple(stages_for_groups(self.selected)), float(self.speed))
