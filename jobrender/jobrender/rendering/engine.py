"""Template rendering engine."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
)

from ..core.models import (
    RedactMode,
    RenderedArtifact,
    TemplateKind,
    TemplateSpec,
    TemplateSpecError,
)
from ..core.tree import ABSENT, ConfigTree, thaw
from ..jobs import get_job
from .certs import emit_certificate
from .flags import build_invocation
from .lifecycle import select_body

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def _dquote(value: Any) -> str:
    """Render a scalar as a double-quoted YAML/JSON string."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return json.dumps(str(value))


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2)


def build_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    """Create the Jinja2 environment for scripts and documents.

    Args:
        templates_dir: Directory holding the per-job template sources

    Returns:
        Configured Jinja2 environment
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["dquote"] = _dquote
    env.filters["to_json"] = _to_json
    return env


def load_template(env: Environment, source: str) -> Template:
    """Load a Jinja2 template by its path under the templates directory.

    Args:
        env: Environment from :func:`build_environment`
        source: Template path relative to the templates directory

    Returns:
        Compiled Jinja2 template
    """
    try:
        return env.get_template(source)
    except TemplateNotFound as e:
        raise FileNotFoundError(f"Template not found: {source}") from e


def build_context(tree: ConfigTree) -> dict[str, Any]:
    """Build the helpers templates use to read properties."""

    def lookup(path: str, default: Any = None) -> Any:
        value = tree.get(path)
        if value is ABSENT:
            return default
        return thaw(value) if isinstance(value, (Mapping, tuple)) else value

    return {
        "lookup": lookup,
        "is_set": tree.is_set,
        "is_true": tree.is_true,
    }


def render_template(
    spec: TemplateSpec,
    tree: ConfigTree,
    redact: RedactMode = RedactMode.REDACT,
    env: Environment | None = None,
) -> RenderedArtifact | None:
    """Render a single template of a job.

    Args:
        spec: Template to render
        tree: Job properties
        redact: Whether sensitive flags are suppressed
        env: Jinja2 environment (built on demand)

    Returns:
        The rendered artifact, or None for an unconfigured certificate
    """
    logger.debug(f"Rendering template: {spec.name} ({spec.kind.value})")

    if spec.kind is TemplateKind.CERTIFICATE:
        text = emit_certificate(tree, spec.slot)
        if text is None:
            return None
        return RenderedArtifact(
            name=spec.name, text=text, secret=spec.secret or spec.slot.is_private_key
        )

    env = env or build_environment()
    context = build_context(tree)
    context.update(spec.variables)

    if spec.kind is TemplateKind.COMMAND:
        context["invocation"] = build_invocation(spec.command, tree, redact)
        source = spec.source
    elif spec.kind is TemplateKind.LIFECYCLE:
        source = select_body(spec, tree)
    elif spec.kind is TemplateKind.DOCUMENT:
        source = spec.source
    else:
        raise TemplateSpecError(f"{spec.name}: unknown template kind {spec.kind!r}")

    text = load_template(env, source).render(**context)
    return RenderedArtifact(
        name=spec.name,
        text=text,
        secret=spec.secret,
        executable=spec.executable,
    )


def render(
    job_name: str,
    template_name: str,
    properties: Mapping[str, Any] | None = None,
    *,
    redact: RedactMode = RedactMode.REDACT,
) -> str:
    """Render one template of a job to text.

    An unconfigured certificate renders as an empty string.
    """
    spec = get_job(job_name).template(template_name)
    artifact = render_template(spec, ConfigTree(properties), redact)
    return artifact.text if artifact is not None else ""


def render_job(
    job_name: str,
    properties: Mapping[str, Any] | None = None,
    *,
    redact: RedactMode = RedactMode.REDACT,
) -> list[RenderedArtifact]:
    """Render every template of a job.

    Unconfigured certificates are skipped.
    """
    job = get_job(job_name)
    tree = ConfigTree(properties)
    env = build_environment()

    logger.info(f"Rendering {len(job.templates)} template(s) for job {job.name}")

    artifacts = []
    for spec in job.templates:
        artifact = render_template(spec, tree, redact, env)
        if artifact is None:
            logger.debug(f"Skipped {spec.name}: not configured")
            continue
        artifacts.append(artifact)

    logger.info(f"Rendered {len(artifacts)} artifact(s) for job {job.name}")
    return artifacts
