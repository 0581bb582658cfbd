"""Components — named, stateful, template-rendered fragments."""

from glint.components.component import NAME_KEY, Component, OnUpdate, StateValue

__all__ = ["NAME_KEY", "Component", "OnUpdate", "StateValue"]
