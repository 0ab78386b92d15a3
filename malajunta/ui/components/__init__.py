"""Markup builders, exposed to every template as ``components.<name>``."""
from __future__ import annotations

from types import MappingProxyType, ModuleType

from . import buttons, cards, feedback, forms, layout


def _by_short_name(*modules: ModuleType) -> MappingProxyType:
    return MappingProxyType({module.__name__.rpartition(".")[2]: module for module in modules})


TEMPLATE_COMPONENTS = _by_short_name(buttons, cards, feedback, forms, layout)

__all__ = ["TEMPLATE_COMPONENTS", "buttons", "cards", "feedback", "forms", "layout"]
