"""Command-line flag builder."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

from ..core.models import CommandSpec, FlagKind, FlagSpec, RedactMode, TemplateSpecError
from ..core.tree import ConfigTree, Presence

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float)


def format_scalar(value: Any) -> str:
    """Render a property leaf as flag text.

    Lists render comma-separated, the form the binaries split option lists on.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _SCALARS):
        return str(value)
    if isinstance(value, tuple) and all(isinstance(v, _SCALARS) for v in value):
        return ",".join(format_scalar(v) for v in value)
    raise TemplateSpecError(
        f"Cannot render a {type(value).__name__} property as a flag value"
    )


def quote(text: str) -> str:
    """Wrap *text* in double quotes, leaving the value itself untouched."""
    return f'"{text}"'


def _quoted(spec: FlagSpec, tree: ConfigTree) -> str | None:
    if tree.presence(spec.source) is not Presence.SET:
        return None
    return f"--{spec.name}={quote(format_scalar(tree.get(spec.source)))}"


def _raw(spec: FlagSpec, tree: ConfigTree) -> str | None:
    if tree.presence(spec.source) is not Presence.SET:
        return None
    return f"--{spec.name}={format_scalar(tree.get(spec.source))}"


def _switch(spec: FlagSpec, tree: ConfigTree) -> str | None:
    return f"--{spec.name}" if tree.is_true(spec.source) else None


def _bare(spec: FlagSpec, tree: ConfigTree) -> str | None:
    return f"--{spec.name}"


def _const(spec: FlagSpec, tree: ConfigTree) -> str | None:
    return f"--{spec.name}={quote(spec.value)}"


def _token(spec: FlagSpec, tree: ConfigTree) -> str | None:
    return spec.value


_TRANSFORMS: Mapping[FlagKind, Callable[[FlagSpec, ConfigTree], str | None]] = {
    FlagKind.QUOTED: _quoted,
    FlagKind.RAW: _raw,
    FlagKind.SWITCH: _switch,
    FlagKind.BARE: _bare,
    FlagKind.CONST: _const,
    FlagKind.TOKEN: _token,
}


def gate_open(tree: ConfigTree, path: str) -> bool:
    """A gate is open for a boolean ``True`` or a non-empty sub-tree."""
    value = tree.get(path)
    if value is True:
        return True
    return isinstance(value, Mapping) and tree.presence(path) is Presence.SET


def render_flag(spec: FlagSpec, tree: ConfigTree, redact: RedactMode) -> str | None:
    """Render one flag, or return None when it must be left out entirely."""
    transform = _TRANSFORMS.get(spec.kind)
    if transform is None:
        raise TemplateSpecError(
            f"No transform defined for flag kind {spec.kind!r} (flag {spec.name!r})"
        )

    if spec.sensitive and redact is RedactMode.REDACT:
        logger.debug(f"Redacted sensitive flag --{spec.name}")
        return None
    if spec.gate and not gate_open(tree, spec.gate):
        return None

    return transform(spec, tree)


def build_flags(
    command: CommandSpec, tree: ConfigTree, redact: RedactMode = RedactMode.REDACT
) -> list[str]:
    """Render the flags of *command* in table order."""
    rendered = [render_flag(spec, tree, redact) for spec in command.flags]
    return [token for token in rendered if token is not None]


def build_invocation(
    command: CommandSpec, tree: ConfigTree, redact: RedactMode = RedactMode.REDACT
) -> str:
    """Render the full invocation line for *command*."""
    tokens = build_flags(command, tree, redact)
    logger.debug(f"Built invocation with {len(tokens)} token(s)")
    return " ".join(tokens)
