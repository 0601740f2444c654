"""smbdriver job: volume driver running on every cell."""

from __future__ import annotations

from ..core.models import (
    CertificateSlot,
    CommandSpec,
    FlagKind,
    FlagSpec,
    JobSpec,
    TemplateKind,
    TemplateSpec,
)

JOB_DIR = "/var/vcap/jobs/smbdriver"
CERTS_DIR = f"{JOB_DIR}/config/certs"
BINARY = "/var/vcap/packages/smbdriver/bin/smbdriver"

# Port the drain script evacuates through; the driver's own default.
ADMIN_PORT = 8590


def _cert_path(slot: CertificateSlot) -> str:
    return f"{CERTS_DIR}/{slot.filename}"


COMMAND = CommandSpec(
    flags=(
        FlagSpec(kind=FlagKind.TOKEN, value=BINARY),
        FlagSpec(kind=FlagKind.RAW, name="listenPort", source="listen_port"),
        FlagSpec(kind=FlagKind.RAW, name="adminPort", source="admin_port"),
        FlagSpec(kind=FlagKind.QUOTED, name="debugAddr", source="debug_addr"),
        FlagSpec(kind=FlagKind.QUOTED, name="driversPath", source="driver_path"),
        FlagSpec(kind=FlagKind.CONST, name="transport", value="tcp-json"),
        FlagSpec(kind=FlagKind.QUOTED, name="mountDir", source="cell_mount_path"),
        FlagSpec(kind=FlagKind.QUOTED, name="logLevel", source="log_level"),
        FlagSpec(kind=FlagKind.QUOTED, name="timeFormat", source="log_time_format"),
        FlagSpec(
            kind=FlagKind.QUOTED, name="mountFlagAllowed", source="allowed_in_mount"
        ),
        FlagSpec(
            kind=FlagKind.QUOTED, name="mountFlagDefault", source="default_in_mount"
        ),
        FlagSpec(
            kind=FlagKind.SWITCH,
            name="enableUniqueVolumeIDs",
            source="enable_unique_volume_ids",
        ),
        FlagSpec(
            kind=FlagKind.SWITCH, name="forceNoserverino", source="force_noserverino"
        ),
        FlagSpec(kind=FlagKind.SWITCH, name="forceNoDfs", source="force_nodfs"),
        FlagSpec(
            kind=FlagKind.SWITCH,
            name="insecureSkipVerify",
            source="ssl.insecure_skip_verify",
        ),
        # TLS flags render as a group whenever a tls block is configured.
        FlagSpec(kind=FlagKind.BARE, name="requireSSL", gate="tls"),
        FlagSpec(
            kind=FlagKind.CONST,
            name="caFile",
            value=_cert_path(CertificateSlot.CA_CERT),
            gate="tls",
        ),
        FlagSpec(
            kind=FlagKind.CONST,
            name="certFile",
            value=_cert_path(CertificateSlot.SERVER_CERT),
            gate="tls",
        ),
        FlagSpec(
            kind=FlagKind.CONST,
            name="keyFile",
            value=_cert_path(CertificateSlot.SERVER_KEY),
            gate="tls",
        ),
        FlagSpec(
            kind=FlagKind.CONST,
            name="clientCertFile",
            value=_cert_path(CertificateSlot.CLIENT_CERT),
            gate="tls",
        ),
        FlagSpec(
            kind=FlagKind.CONST,
            name="clientKeyFile",
            value=_cert_path(CertificateSlot.CLIENT_KEY),
            gate="tls",
        ),
    )
)

JOB = JobSpec(
    name="smbdriver",
    templates=(
        TemplateSpec(
            name="bin/smbdriver_ctl",
            kind=TemplateKind.COMMAND,
            source="smbdriver/smbdriver_ctl.sh.j2",
            command=COMMAND,
            executable=True,
        ),
        TemplateSpec(
            name="bin/pre-start",
            kind=TemplateKind.LIFECYCLE,
            source="smbdriver/pre-start.sh.j2",
            disabled_source="smbdriver/pre-start-disabled.sh.j2",
            executable=True,
        ),
        TemplateSpec(
            name="bin/drain",
            kind=TemplateKind.DOCUMENT,
            source="smbdriver/drain.sh.j2",
            variables={"admin_port": ADMIN_PORT},
            executable=True,
        ),
        *(
            TemplateSpec(
                name=f"config/certs/{slot.filename}",
                kind=TemplateKind.CERTIFICATE,
                slot=slot,
            )
            for slot in CertificateSlot
        ),
    ),
)
