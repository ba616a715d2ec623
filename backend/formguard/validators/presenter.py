"""Error presenters — receivers of the engine's violation signals.

The engine assumes every group has a display slot for each violation kind it
can raise. Presenters are not expected to check this; a missing slot is a
configuration error on the caller's side.
"""

from abc import ABC, abstractmethod

import structlog

from formguard.models.fields import Group
from formguard.validators.models import ViolationKind

logger = structlog.get_logger()


class ErrorPresenter(ABC):
    """Abstract sink for group-level error markings."""

    @abstractmethod
    def clear_all(self) -> None:
        """Remove the error marking from every group."""
        ...

    @abstractmethod
    def mark_group_error(self, group: Group) -> None:
        """Flag a group as containing at least one violation."""
        ...

    @abstractmethod
    def show_violation(self, group: Group, kind: ViolationKind) -> None:
        """Reveal the display slot for one violation kind in a group."""
        ...

    @abstractmethod
    def hide_all_violations(self) -> None:
        """Hide every violation slot in every group."""
        ...


class RecordingPresenter(ErrorPresenter):
    """Keeps markings in memory, the way a page would after a pass.

    ``signals`` keeps every call in order, including repeats for the same
    group and kind.
    """

    def __init__(self):
        self.error_groups: dict[str, Group] = {}
        self.shown: dict[str, set[ViolationKind]] = {}
        self.signals: list[tuple[str, ViolationKind]] = []

    def clear_all(self) -> None:
        self.error_groups.clear()

    def mark_group_error(self, group: Group) -> None:
        self.error_groups[group.id] = group

    def show_violation(self, group: Group, kind: ViolationKind) -> None:
        self.shown.setdefault(group.id, set()).add(kind)
        self.signals.append((group.id, kind))
        logger.debug("violation_shown", group=group.id, kind=kind.value)

    def hide_all_violations(self) -> None:
        self.shown.clear()
        self.signals.clear()

    def is_marked(self, group_id: str) -> bool:
        return group_id in self.error_groups

    def kinds_for(self, group_id: str) -> set[ViolationKind]:
        return set(self.shown.get(group_id, set()))
