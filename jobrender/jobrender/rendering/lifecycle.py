"""Enabled/disabled selection for lifecycle hook bodies."""

from __future__ import annotations

import logging

from ..core.models import TemplateKind, TemplateSpec, TemplateSpecError
from ..core.tree import ConfigTree

logger = logging.getLogger(__name__)


def is_disabled(tree: ConfigTree, path: str = "disable") -> bool:
    return tree.is_true(path)


def select_body(spec: TemplateSpec, tree: ConfigTree) -> str:
    """Return the Jinja2 source to render for a lifecycle template.

    The enabled and disabled bodies are separate templates; exactly one of
    them is chosen per render.
    """
    if spec.kind is not TemplateKind.LIFECYCLE:
        raise TemplateSpecError(f"{spec.name} is not a lifecycle template")

    if is_disabled(tree, spec.disable_path):
        logger.info(f"{spec.name}: job disabled, rendering no-op body")
        return spec.disabled_source
    return spec.source
