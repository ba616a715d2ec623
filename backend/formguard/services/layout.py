"""Form layout — compiles a definition tree into fields with resolved groups.

Group resolution happens once, here, instead of on every pass: each field is
given a back-reference to its nearest enclosing group container. Structural
preconditions (unknown references, duplicate ids, fields outside any group)
are checked at the same time.
"""

from typing import Iterable, Optional

import structlog

from formguard.config import get_settings
from formguard.exceptions import (
    DuplicateContainerError,
    DuplicateFieldError,
    UngroupedFieldError,
    UnknownReferenceError,
)
from formguard.models.fields import FieldDescriptor, FieldSet, FieldSpec, Group
from formguard.models.forms import ContainerNode, FieldNode, FormDefinition

logger = structlog.get_logger()


class FormLayout:
    """Compiled, immutable structure of one form."""

    def __init__(
        self,
        form_id: str,
        specs: list[FieldSpec],
        groups: dict[str, Optional[Group]],
        scopes: dict[str, set[str]],
    ):
        self.form_id = form_id
        self.specs = specs
        self._groups = groups
        self._scopes = scopes

    @classmethod
    def compile(
        cls,
        definition: FormDefinition,
        group_tags: Optional[Iterable[str]] = None,
        strict_groups: Optional[bool] = None,
    ) -> "FormLayout":
        """Walk the definition tree and resolve every field's group.

        Args:
            definition: The form tree
            group_tags: Container tags that are error-reporting groups;
                defaults to settings.GROUP_TAGS
            strict_groups: Raise instead of warn on fields outside any
                group; defaults to settings.STRICT_GROUPS

        Raises:
            DuplicateContainerError, DuplicateFieldError, UnknownReferenceError,
            UngroupedFieldError
        """
        settings = get_settings()
        tags = {t.lower() for t in (group_tags if group_tags is not None else settings.GROUP_TAGS)}
        strict = settings.STRICT_GROUPS if strict_groups is None else strict_groups

        specs: list[FieldSpec] = []
        groups: dict[str, Optional[Group]] = {}
        scopes: dict[str, set[str]] = {}
        explicit_ids = cls._container_ids(definition.children)
        counter = 0

        def next_group_id() -> str:
            nonlocal counter
            while True:
                counter += 1
                candidate = f"group-{counter}"
                if candidate not in explicit_ids:
                    return candidate

        def walk(nodes, group: Optional[Group], path: tuple[str, ...]) -> None:
            for node in nodes:
                if isinstance(node, ContainerNode):
                    inner_group = group
                    if node.tag.lower() in tags:
                        inner_group = Group(id=node.id or next_group_id(), tag=node.tag.lower())
                    inner_path = path
                    if node.id:
                        scopes.setdefault(node.id, set())
                        inner_path = path + (node.id,)
                    walk(node.children, inner_group, inner_path)
                elif isinstance(node, FieldNode):
                    if node.id in groups:
                        raise DuplicateFieldError(node.id)
                    specs.append(node)
                    groups[node.id] = group
                    for container_id in path:
                        scopes[container_id].add(node.id)

        walk(definition.children, None, ())

        for spec in specs:
            if spec.same_as is not None and spec.same_as not in groups:
                raise UnknownReferenceError(spec.id, spec.same_as)
            if spec.validates is not None and spec.validates not in scopes:
                raise UnknownReferenceError(spec.id, spec.validates)

        layout = cls(definition.id, specs, groups, scopes)

        ungrouped = layout.ungrouped
        if ungrouped:
            if strict:
                raise UngroupedFieldError(ungrouped)
            # These fields will never be validated
            logger.warning("field_outside_group", form_id=definition.id, fields=ungrouped)

        return layout

    @staticmethod
    def _container_ids(nodes) -> set[str]:
        """Explicit container ids in the tree; a repeated id is rejected."""
        seen: set[str] = set()
        pending = list(nodes)
        while pending:
            node = pending.pop()
            if isinstance(node, ContainerNode):
                if node.id:
                    if node.id in seen:
                        raise DuplicateContainerError(node.id)
                    seen.add(node.id)
                pending.extend(node.children)
        return seen

    @property
    def field_ids(self) -> list[str]:
        return [spec.id for spec in self.specs]

    @property
    def groups(self) -> list[Group]:
        """Distinct groups in document order."""
        seen: dict[str, Group] = {}
        for spec in self.specs:
            group = self._groups[spec.id]
            if group is not None and group.id not in seen:
                seen[group.id] = group
        return list(seen.values())

    @property
    def ungrouped(self) -> list[str]:
        return [spec.id for spec in self.specs if self._groups[spec.id] is None]

    def group_of(self, field_id: str) -> Optional[Group]:
        return self._groups.get(field_id)

    def bind(
        self,
        values: Optional[dict[str, str]] = None,
        checked: Iterable[str] = (),
    ) -> FieldSet:
        """Build this pass's field set from submitted values and checked ids."""
        values = values or {}
        checked_ids = set(checked)
        return FieldSet(
            FieldDescriptor.bind(
                spec,
                value=values.get(spec.id, ""),
                checked=spec.id in checked_ids,
                group=self._groups[spec.id],
            )
            for spec in self.specs
        )

    def candidates(self, fields: FieldSet, trigger: Optional[str] = None) -> list[FieldDescriptor]:
        """Fields to validate for a submission started by ``trigger``.

        A submit control that declares ``validates`` limits validation to
        the fields inside that container.
        """
        if trigger is None:
            return list(fields)

        control = fields.get(trigger)
        if control is None:
            raise UnknownReferenceError("trigger", trigger)
        if control.validates is None:
            return list(fields)

        scope = self._scopes[control.validates]
        return [field for field in fields if field.id in scope]
