"""Tests for the jobrender CLI."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from jobrender.cli import app
from jobrender.core.settings import RenderSettings

runner = CliRunner()


@pytest.fixture
def broker_props(tmp_path: Path) -> Path:
    path = tmp_path / "props.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "credhub": {
                    "url": "u",
                    "uaa_client_id": "c",
                    "uaa_client_secret": "s",
                    "store_id": "id",
                },
                "log_level": "L",
                "log_time_format": "F",
            }
        )
    )
    return path


@pytest.fixture
def driver_props(tmp_path: Path) -> Path:
    path = tmp_path / "driver.yml"
    path.write_text(
        "listen_port: 1111\n"
        "tls:\n"
        "  ca_cert: some-ca-cert\n"
        "  server_key: some-server-key\n"
        "ssl:\n"
        "  insecure_skip_verify: true\n"
    )
    return path


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


# ── TestRender ───────────────────────────────────────────────────────


class TestRender:
    def test_redacts_by_default(self, broker_props, monkeypatch):
        monkeypatch.delenv("JOBRENDER_REDACT_MODE", raising=False)
        result = runner.invoke(
            app, ["render", "smbbrokerpush", "start.sh", "--properties", str(broker_props)]
        )
        assert result.exit_code == 0, result.output
        assert '--credhubURL="u"' in result.stdout
        assert '--storeID="id"' in result.stdout
        assert '--logLevel="L"' in result.stdout
        assert '--timeFormat="F"' in result.stdout
        assert "uaaClientID" not in result.stdout
        assert "uaaClientSecret" not in result.stdout

    def test_expose_flag(self, broker_props):
        result = runner.invoke(
            app,
            [
                "render",
                "smbbrokerpush",
                "start.sh",
                "-p",
                str(broker_props),
                "--expose-sensitive",
            ],
        )
        assert result.exit_code == 0, result.output
        assert '--uaaClientID="c"' in result.stdout
        assert '--uaaClientSecret="s"' in result.stdout

    def test_expose_from_environment(self, broker_props, monkeypatch):
        monkeypatch.setenv("JOBRENDER_REDACT_MODE", "expose")
        result = runner.invoke(
            app, ["render", "smbbrokerpush", "start.sh", "-p", str(broker_props)]
        )
        assert result.exit_code == 0, result.output
        assert '--uaaClientID="c"' in result.stdout

    def test_redact_flag_overrides_environment(self, broker_props, monkeypatch):
        monkeypatch.setenv("JOBRENDER_REDACT_MODE", "expose")
        result = runner.invoke(
            app,
            [
                "render",
                "smbbrokerpush",
                "start.sh",
                "-p",
                str(broker_props),
                "--redact-sensitive",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "uaaClientID" not in result.stdout

    def test_certificate_to_stdout_is_exact(self, driver_props):
        result = runner.invoke(
            app, ["render", "smbdriver", "config/certs/ca.crt", "-p", str(driver_props)]
        )
        assert result.exit_code == 0, result.output
        assert result.stdout == "some-ca-cert"

    def test_output_file_with_mode(self, driver_props, tmp_path):
        out = tmp_path / "out" / "smbdriver_ctl"
        result = runner.invoke(
            app,
            [
                "render",
                "smbdriver",
                "bin/smbdriver_ctl",
                "-p",
                str(driver_props),
                "--output",
                str(out),
                "--mode",
                "0700",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "--listenPort=1111" in out.read_text()
        assert _mode(out) == 0o700

    def test_unknown_template_exits_nonzero(self, driver_props):
        result = runner.invoke(
            app, ["render", "smbdriver", "bin/nope", "-p", str(driver_props)]
        )
        assert result.exit_code == 1

    def test_missing_properties_file(self, tmp_path):
        result = runner.invoke(
            app,
            ["render", "smbdriver", "bin/pre-start", "-p", str(tmp_path / "missing.yml")],
        )
        assert result.exit_code == 2

    def test_non_mapping_properties(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        result = runner.invoke(app, ["render", "smbdriver", "bin/pre-start", "-p", str(path)])
        assert result.exit_code == 2

    def test_empty_properties_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        result = runner.invoke(app, ["render", "smbdriver", "bin/pre-start", "-p", str(path)])
        assert result.exit_code == 0, result.output
        assert "exit 0" in result.stdout


# ── TestRenderJob ────────────────────────────────────────────────────


class TestRenderJob:
    def test_writes_job_tree(self, driver_props, tmp_path):
        dest = tmp_path / "job"
        result = runner.invoke(
            app, ["render-job", "smbdriver", "-p", str(driver_props), "--dest-root", str(dest)]
        )
        assert result.exit_code == 0, result.output

        assert (dest / "config/certs/ca.crt").read_text() == "some-ca-cert"
        assert (dest / "config/certs/server.key").read_text() == "some-server-key"
        assert not (dest / "config/certs/client.key").exists()
        assert "--requireSSL" in (dest / "bin/smbdriver_ctl").read_text()

        assert _mode(dest / "bin/smbdriver_ctl") == 0o755
        assert _mode(dest / "config/certs/server.key") == 0o600
        assert _mode(dest / "config/certs/ca.crt") == 0o644

    def test_dest_root_from_environment(self, broker_props, tmp_path, monkeypatch):
        dest = tmp_path / "env-dest"
        monkeypatch.setenv("JOBRENDER_DEST_ROOT", str(dest))
        result = runner.invoke(app, ["render-job", "smbbrokerpush", "-p", str(broker_props)])
        assert result.exit_code == 0, result.output
        assert (dest / "start.sh").exists()
        assert _mode(dest / "manifest.yml") == 0o600

    def test_modes_from_environment_are_octal(self, broker_props, tmp_path, monkeypatch):
        dest = tmp_path / "octal"
        monkeypatch.setenv("JOBRENDER_SECRET_MODE", "640")
        monkeypatch.setenv("JOBRENDER_SCRIPT_MODE", "0750")
        result = runner.invoke(
            app, ["render-job", "smbbrokerpush", "-p", str(broker_props), "--dest-root", str(dest)]
        )
        assert result.exit_code == 0, result.output
        assert _mode(dest / "manifest.yml") == 0o640
        assert _mode(dest / "start.sh") == 0o750


# ── TestList ─────────────────────────────────────────────────────────


class TestList:
    def test_lists_all_jobs(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "smbdriver" in result.stdout
        assert "smbbrokerpush" in result.stdout
        assert "config/certs/ca.crt (certificate)" in result.stdout

    def test_single_job(self):
        result = runner.invoke(app, ["list", "smbbrokerpush"])
        assert result.exit_code == 0
        assert "smbdriver" not in result.stdout
        assert "start.sh (command)" in result.stdout

    def test_unknown_job(self):
        result = runner.invoke(app, ["list", "nfsdriver"])
        assert result.exit_code == 1


# ── TestSettings ─────────────────────────────────────────────────────


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("FILE_MODE", "SCRIPT_MODE", "SECRET_MODE"):
            monkeypatch.delenv(f"JOBRENDER_{name}", raising=False)
        settings = RenderSettings()
        assert settings.file_mode == 0o644
        assert settings.script_mode == 0o755
        assert settings.secret_mode == 0o600

    def test_env_mode_parsed_as_octal(self, monkeypatch):
        monkeypatch.setenv("JOBRENDER_SECRET_MODE", "600")
        assert RenderSettings().secret_mode == 0o600

    def test_invalid_env_mode_rejected(self, monkeypatch):
        monkeypatch.setenv("JOBRENDER_FILE_MODE", "rw-r--r--")
        with pytest.raises(ValueError, match="Invalid octal mode"):
            RenderSettings()
