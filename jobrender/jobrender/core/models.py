"""Domain models for job templates and rendered artifacts."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TemplateSpecError(ValueError):
    """Raised when a template table cannot be rendered as declared."""


class UnknownTemplateError(TemplateSpecError):
    """Raised when a job or template name is not registered."""


class RedactMode(str, Enum):
    """Whether sensitive flags are suppressed or rendered."""

    REDACT = "redact"
    EXPOSE = "expose"


class FlagKind(str, Enum):
    QUOTED = "quoted"
    RAW = "raw"
    SWITCH = "switch"
    BARE = "bare"
    CONST = "const"
    TOKEN = "token"


class CertificateSlot(str, Enum):
    """TLS material a job can write out as a standalone file."""

    CA_CERT = "ca_cert"
    CLIENT_CERT = "client_cert"
    CLIENT_KEY = "client_key"
    SERVER_CERT = "server_cert"
    SERVER_KEY = "server_key"

    @property
    def filename(self) -> str:
        return _SLOT_FILENAMES[self]

    @property
    def property_path(self) -> str:
        return f"tls.{self.value}"

    @property
    def is_private_key(self) -> bool:
        return self in (CertificateSlot.CLIENT_KEY, CertificateSlot.SERVER_KEY)


_SLOT_FILENAMES = {
    CertificateSlot.CA_CERT: "ca.crt",
    CertificateSlot.CLIENT_CERT: "client.crt",
    CertificateSlot.CLIENT_KEY: "client.key",
    CertificateSlot.SERVER_CERT: "server.crt",
    CertificateSlot.SERVER_KEY: "server.key",
}

_SOURCED_KINDS = {FlagKind.QUOTED, FlagKind.RAW, FlagKind.SWITCH}


class FlagSpec(BaseModel):
    """A single command-line flag and the rule that decides whether it renders."""

    model_config = ConfigDict(frozen=True)

    kind: FlagKind = Field(..., description="Value transform")
    name: str | None = Field(default=None, description="Flag name without dashes")
    source: str | None = Field(default=None, description="Property path of the value")
    value: str | None = Field(default=None, description="Fixed value or literal token")
    gate: str | None = Field(
        default=None, description="Property that must be true or a non-empty sub-tree"
    )
    sensitive: bool = Field(default=False, description="Suppressed in redact mode")

    @model_validator(mode="after")
    def _check_fields(self) -> FlagSpec:
        if self.kind is FlagKind.TOKEN:
            if not self.value:
                raise ValueError("token flags need a literal value")
            if self.gate or self.sensitive or self.source:
                raise ValueError("token flags are unconditional")
            return self
        if not self.name:
            raise ValueError(f"{self.kind.value} flags need a name")
        if self.kind in _SOURCED_KINDS and not self.source:
            raise ValueError(f"--{self.name}: {self.kind.value} flags need a source")
        if self.kind is FlagKind.CONST and self.value is None:
            raise ValueError(f"--{self.name}: const flags need a value")
        return self


class CommandSpec(BaseModel):
    """Ordered flag table for one binary invocation."""

    model_config = ConfigDict(frozen=True)

    flags: tuple[FlagSpec, ...] = Field(..., min_length=1)


class TemplateKind(str, Enum):
    COMMAND = "command"
    CERTIFICATE = "certificate"
    LIFECYCLE = "lifecycle"
    DOCUMENT = "document"


class TemplateSpec(BaseModel):
    """One named template of a job."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Path of the rendered file inside the job")
    kind: TemplateKind
    source: str | None = Field(default=None, description="Jinja2 template file")
    disabled_source: str | None = Field(
        default=None, description="Jinja2 template used when the job is disabled"
    )
    disable_path: str = Field(default="disable")
    command: CommandSpec | None = None
    slot: CertificateSlot | None = None
    executable: bool = False
    secret: bool = Field(default=False, description="Rendered text holds credentials")
    variables: dict[str, str | int] = Field(
        default_factory=dict, description="Fixed values exposed to the template"
    )

    @model_validator(mode="after")
    def _check_kind(self) -> TemplateSpec:
        if self.kind is TemplateKind.CERTIFICATE:
            if self.slot is None:
                raise ValueError(f"{self.name}: certificate templates need a slot")
            return self
        if not self.source:
            raise ValueError(f"{self.name}: {self.kind.value} templates need a source")
        if self.kind is TemplateKind.COMMAND and self.command is None:
            raise ValueError(f"{self.name}: command templates need a flag table")
        if self.kind is TemplateKind.LIFECYCLE and not self.disabled_source:
            raise ValueError(f"{self.name}: lifecycle templates need a disabled body")
        return self


class JobSpec(BaseModel):
    """A job and its templates in render order."""

    model_config = ConfigDict(frozen=True)

    name: str
    templates: tuple[TemplateSpec, ...] = Field(..., min_length=1)

    def template(self, name: str) -> TemplateSpec:
        for spec in self.templates:
            if spec.name == name:
                return spec
        known = ", ".join(spec.name for spec in self.templates)
        raise UnknownTemplateError(
            f"Job '{self.name}' has no template '{name}'. Known templates: {known}"
        )


class RenderedArtifact(BaseModel):
    """Text produced for one template."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Path of the file inside the job")
    text: str
    secret: bool = False
    executable: bool = False
