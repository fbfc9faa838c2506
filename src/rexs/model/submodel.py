"""Sub-models: load cases and the accumulation of a load spectrum.

A sub-model shares the component-id space of its master model (the same id
denotes the same physical part) but stores its own attribute values.
"""

from __future__ import annotations

from rexs.constants.component_types import RexsComponentType
from rexs.core.errors import ModelAccessError
from rexs.core.logging import get_logger
from rexs.model.component import RexsComponent
from rexs.model.records import RawAccumulation, RawComponent, RawLoadCase

logger = get_logger(__name__)


class RexsSubModel:
    """Attribute overlay of a load case (``load_case_id`` set) or of the accumulation."""

    def __init__(self, raw: RawLoadCase | RawAccumulation | None = None):
        self._raw = raw if raw is not None else RawAccumulation()
        self._components: dict[int, RexsComponent] = {}
        for raw_component in self._raw.components:
            if raw_component.id in self._components:
                raise ModelAccessError(
                    f"component with id {raw_component.id} already exists in sub-model"
                ).with_context(component_id=raw_component.id)
            self._components[raw_component.id] = RexsComponent(raw_component)

    @property
    def raw(self) -> RawLoadCase | RawAccumulation:
        return self._raw

    @property
    def is_load_case(self) -> bool:
        return isinstance(self._raw, RawLoadCase)

    @property
    def load_case_id(self) -> int | None:
        return self._raw.id if isinstance(self._raw, RawLoadCase) else None

    @property
    def components(self) -> list[RexsComponent]:
        return list(self._components.values())

    def has_component(self, component_id: int) -> bool:
        return component_id in self._components

    def get_component(self, component_id: int) -> RexsComponent | None:
        return self._components.get(component_id)

    def add_component(
        self, component_id: int, component_type: RexsComponentType | None = None
    ) -> RexsComponent:
        """Add an overlay entry for the master component ``component_id``."""
        if component_id in self._components:
            raise ModelAccessError(
                f"component with id {component_id} already exists in sub-model"
            ).with_context(component_id=component_id)
        raw_component = RawComponent(
            id=component_id, type=component_type.key if component_type is not None else None
        )
        component = RexsComponent(raw_component)
        self._raw.components.append(raw_component)
        self._components[component_id] = component
        return component

    def change_component_id(self, old_id: int, new_id: int) -> None:
        """Renumber ``old_id`` and rewrite every reference attribute pointing at it."""
        if old_id == new_id:
            return
        component = self._components.pop(old_id, None)
        if component is not None:
            component._set_id(new_id)
            self._components[new_id] = component
        rewritten = sum(
            candidate.change_reference_ids(old_id, new_id) for candidate in self._components.values()
        )
        logger.debug(
            "submodel.component_id_changed",
            load_case_id=self.load_case_id,
            old_id=old_id,
            new_id=new_id,
            references_rewritten=rewritten,
        )

    def __lt__(self, other: RexsSubModel) -> bool:
        return (self.load_case_id or 0) < (other.load_case_id or 0)

    def __repr__(self) -> str:
        if self.is_load_case:
            return f"RexsSubModel(load_case_id={self.load_case_id}, components={len(self._components)})"
        return f"RexsSubModel(accumulation, components={len(self._components)})"


__all__ = ["RexsSubModel"]
