"""smbbrokerpush job: service broker pushed as a CF app."""

from __future__ import annotations

from ..core.models import (
    CommandSpec,
    FlagKind,
    FlagSpec,
    JobSpec,
    TemplateKind,
    TemplateSpec,
)

COMMAND = CommandSpec(
    flags=(
        FlagSpec(kind=FlagKind.TOKEN, value="bin/smbbroker"),
        FlagSpec(kind=FlagKind.TOKEN, value='--listenAddr="0.0.0.0:$PORT"'),
        FlagSpec(kind=FlagKind.TOKEN, value='--servicesConfig="./services.json"'),
        FlagSpec(kind=FlagKind.QUOTED, name="credhubURL", source="credhub.url"),
        FlagSpec(
            kind=FlagKind.QUOTED,
            name="uaaClientID",
            source="credhub.uaa_client_id",
            sensitive=True,
        ),
        FlagSpec(
            kind=FlagKind.QUOTED,
            name="uaaClientSecret",
            source="credhub.uaa_client_secret",
            sensitive=True,
        ),
        FlagSpec(kind=FlagKind.QUOTED, name="storeID", source="credhub.store_id"),
        FlagSpec(kind=FlagKind.QUOTED, name="logLevel", source="log_level"),
        FlagSpec(kind=FlagKind.QUOTED, name="timeFormat", source="log_time_format"),
    )
)

JOB = JobSpec(
    name="smbbrokerpush",
    templates=(
        TemplateSpec(
            name="start.sh",
            kind=TemplateKind.COMMAND,
            source="smbbrokerpush/start.sh.j2",
            command=COMMAND,
            executable=True,
        ),
        TemplateSpec(
            name="manifest.yml",
            kind=TemplateKind.DOCUMENT,
            source="smbbrokerpush/manifest.yml.j2",
            secret=True,
        ),
        TemplateSpec(
            name="services.json",
            kind=TemplateKind.DOCUMENT,
            source="smbbrokerpush/services.json.j2",
        ),
    ),
)
