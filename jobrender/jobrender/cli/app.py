"""Main CLI application."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.models import RedactMode, TemplateSpecError
from ..core.settings import RenderSettings
from ..core.tree import ConfigTree, ConfigTreeError
from ..jobs import JOBS, get_job
from ..rendering import engine
from ..rendering.io import write_artifacts
from .parsers import parse_file_mode, parse_properties

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="jobrender",
    help="Render BOSH job scripts, flags and certificates from manifest properties.",
    no_args_is_help=True,
)

PropertiesOption = Annotated[
    str,
    typer.Option(
        "--properties",
        "-p",
        help="YAML file with the job's manifest properties.",
        metavar="FILE",
    ),
]
ExposeOption = Annotated[
    Optional[bool],
    typer.Option(
        "--expose-sensitive/--redact-sensitive",
        help="Render sensitive flags instead of suppressing them "
        "(default: JOBRENDER_REDACT_MODE, or redact).",
        show_default=False,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def _redact_mode(expose: bool | None, settings: RenderSettings) -> RedactMode:
    if expose is None:
        return settings.redact_mode
    return RedactMode.EXPOSE if expose else RedactMode.REDACT


@app.command()
def render(
    job: Annotated[str, typer.Argument(help="Job name, e.g. smbdriver.")],
    template: Annotated[
        str, typer.Argument(help="Template name, e.g. bin/smbdriver_ctl.")
    ],
    properties: PropertiesOption,
    expose: ExposeOption = None,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Write to FILE instead of stdout.",
            metavar="FILE",
        ),
    ] = "",
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal for --output (default: by artifact type).",
            metavar="OCTAL",
        ),
    ] = "",
    verbose: VerboseOption = False,
) -> None:
    """Render a single template of a job."""
    _configure_logging(verbose)
    settings = RenderSettings()
    props = parse_properties(properties)
    redact = _redact_mode(expose, settings)

    logger.debug(f"Rendering {job}:{template} in {redact.value} mode")

    try:
        spec = get_job(job).template(template)
        artifact = engine.render_template(spec, ConfigTree(props), redact)
    except (TemplateSpecError, ConfigTreeError) as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    if artifact is None:
        logger.info(f"{template} is not configured; nothing rendered")
        return

    if not output:
        typer.echo(artifact.text, nl=False)
        return

    modes = {
        "file_mode": settings.file_mode,
        "script_mode": settings.script_mode,
        "secret_mode": settings.secret_mode,
    }
    if file_mode:
        mode = parse_file_mode(file_mode)
        modes = dict.fromkeys(modes, mode)

    output_path = Path(output)
    artifact = artifact.model_copy(update={"name": output_path.name})
    write_artifacts([artifact], output_path.parent, **modes)


@app.command("render-job")
def render_job(
    job: Annotated[str, typer.Argument(help="Job name, e.g. smbdriver.")],
    properties: PropertiesOption,
    dest_root: Annotated[
        str,
        typer.Option(
            "--dest-root",
            help="Directory to write the job's files into "
            "(default: JOBRENDER_DEST_ROOT, or cwd).",
            metavar="DIR",
        ),
    ] = "",
    expose: ExposeOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render every template of a job into a directory."""
    _configure_logging(verbose)
    settings = RenderSettings()
    props = parse_properties(properties)
    redact = _redact_mode(expose, settings)
    dest_path = Path(dest_root) if dest_root else settings.dest_root

    try:
        artifacts = engine.render_job(job, props, redact=redact)
    except (TemplateSpecError, ConfigTreeError) as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    outputs = write_artifacts(
        artifacts,
        dest_path,
        file_mode=settings.file_mode,
        script_mode=settings.script_mode,
        secret_mode=settings.secret_mode,
    )
    logger.debug(f"Completed: {len(outputs)} file(s) written")


@app.command("list")
def list_templates(
    job: Annotated[
        Optional[str], typer.Argument(help="Only list templates of this job.")
    ] = None,
) -> None:
    """List jobs and their templates."""
    if job is not None and job not in JOBS:
        typer.echo(f"Unknown job: {job}", err=True)
        raise typer.Exit(code=1)

    names = [job] if job is not None else sorted(JOBS)
    for name in names:
        typer.echo(name)
        for spec in JOBS[name].templates:
            typer.echo(f"  {spec.name} ({spec.kind.value})")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
