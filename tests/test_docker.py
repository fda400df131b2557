"""Tests for kmake_tooling.docker (Dockerfile generation, image check/build, docker run argv)."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kmake_tooling.config import resolve_config
from kmake_tooling.docker.generate_dockerfile import (
    DEFAULT_TEMPLATE,
    environment_packages,
    generate_dockerfile,
    render_dockerfile,
)


class TestGenerateDockerfile:
    def test_packages_cover_every_toolchain(self) -> None:
        pkgs = environment_packages()
        for p in (
            "gcc-x86-64-linux-gnu",
            "gcc-aarch64-linux-gnu",
            "gcc-arm-linux-gnueabihf",
            "gcc-riscv64-linux-gnu",
            "ccache",
        ):
            assert p in pkgs
        assert pkgs == sorted(pkgs)

    def test_writes_default_location(self, tmp_path: Path) -> None:
        out = generate_dockerfile(tmp_path)
        assert out == tmp_path / "docker" / "Dockerfile"
        content = out.read_text()
        assert content.startswith("FROM debian:bookworm-slim\n")
        assert "xz-utils \\\n && rm -rf /var/lib/apt/lists/*" in content
        assert "{{" not in content

    def test_custom_template(self, tmp_path: Path) -> None:
        tpl = tmp_path / "Dockerfile.tpl"
        tpl.write_text("FROM {{base_image}}\nWORKDIR {{workdir}}\n")
        out = generate_dockerfile(
            tmp_path,
            output_path=Path("out/Dockerfile"),
            template_path=tpl,
            base_image="ubuntu:24.04",
        )
        assert out == tmp_path / "out" / "Dockerfile"
        assert out.read_text() == "FROM ubuntu:24.04\nWORKDIR /src\n"

    def test_missing_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            generate_dockerfile(tmp_path, template_path=tmp_path / "missing")

    def test_run_returns_1_on_missing_template(self, tmp_path: Path) -> None:
        from kmake_tooling.docker.generate_dockerfile import run

        assert run(tmp_path, template_path=tmp_path / "missing") == 1

    def test_checked_in_dockerfile_matches_template(self) -> None:
        repo_dockerfile = Path(__file__).resolve().parents[1] / "docker" / "Dockerfile"
        assert repo_dockerfile.read_text() == render_dockerfile(DEFAULT_TEMPLATE)


class TestImageExists:
    def test_true_when_id_listed(self) -> None:
        from kmake_tooling.docker import image_exists

        with patch("subprocess.run", return_value=MagicMock(returncode=0, stdout="abc123\n")) as m:
            assert image_exists("kmake-builder:latest") is True
        assert m.call_args[0][0] == ["docker", "images", "-q", "kmake-builder:latest"]

    def test_false_when_empty(self) -> None:
        from kmake_tooling.docker import image_exists

        with patch("subprocess.run", return_value=MagicMock(returncode=0, stdout="")):
            assert image_exists("kmake-builder:latest") is False


class TestBuildImage:
    def test_dry_run_generates_dockerfile_and_skips_docker(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        from kmake_tooling.docker import build_image

        with patch("subprocess.run") as m:
            rc = build_image(tmp_path, "kmake-builder:latest", dry_run=True, uid=1234, gid=99)
        assert rc == 0
        assert not m.called
        assert (tmp_path / "docker" / "Dockerfile").exists()
        out = capsys.readouterr().out
        assert "[dry-run]" in out
        assert "USER_UID=1234" in out
        assert "USER_GID=99" in out

    def test_returns_1_when_docker_missing(self, tmp_path: Path) -> None:
        from kmake_tooling.docker import build_image

        with patch("shutil.which", return_value=None):
            assert build_image(tmp_path, "kmake-builder:latest") == 1

    def test_runs_docker_build(self, tmp_path: Path) -> None:
        from kmake_tooling.docker import build_image

        with (
            patch("shutil.which", return_value="/usr/bin/docker"),
            patch("subprocess.run", return_value=MagicMock(returncode=0)) as m,
        ):
            assert build_image(tmp_path, "img:1", uid=1000, gid=1000) == 0
        (cmd,) = m.call_args[0]
        assert cmd[:2] == ["docker", "build"]
        assert "img:1" in cmd
        assert cmd[-1] == str(tmp_path / "docker")

    def test_returns_1_when_build_fails(self, tmp_path: Path) -> None:
        from kmake_tooling.docker import build_image

        with (
            patch("shutil.which", return_value="/usr/bin/docker"),
            patch("subprocess.run", return_value=MagicMock(returncode=2)),
        ):
            assert build_image(tmp_path, "img:1") == 1


class TestImageCheck:
    def test_missing_image_prints_remediation(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        from kmake_tooling.docker import run_image_check

        with (
            patch("shutil.which", return_value="/usr/bin/docker"),
            patch("subprocess.run", return_value=MagicMock(returncode=0, stdout="")),
        ):
            assert run_image_check("kmake-builder:latest") == 1
        assert "kmake image build" in capsys.readouterr().err


class TestDockerRunCommand:
    def test_mounts_env_and_limits(self, tmp_path: Path) -> None:
        from kmake_tooling.docker import docker_run_command

        cfg = resolve_config({"cpus": "4", "memory": "8g"})
        with patch("kmake_tooling.docker.run.host_ids", return_value=(1000, 1001)):
            cmd = docker_run_command(
                "img:1",
                tmp_path,
                cfg,
                {"ARCH": "arm64", "CROSS_COMPILE": "aarch64-linux-gnu-"},
                ["make", "-j4"],
            )
        assert cmd[:3] == ["docker", "run", "--rm"]
        assert "-it" not in cmd
        assert cmd[cmd.index("-u") + 1] == "1000:1001"
        assert f"{tmp_path}:/src" in cmd
        assert f"{tmp_path / '.ccache'}:/ccache" in cmd
        assert "ARCH=arm64" in cmd
        assert "CROSS_COMPILE=aarch64-linux-gnu-" in cmd
        assert "CCACHE_DIR=/ccache" in cmd
        assert "CCACHE_MAXSIZE=20G" in cmd
        assert cmd[cmd.index("--cpus") + 1] == "4"
        assert cmd[cmd.index("--memory") + 1] == "8g"
        assert cmd[-3:] == ["img:1", "make", "-j4"]

    def test_limits_omitted_when_unset(self, tmp_path: Path) -> None:
        from kmake_tooling.docker import docker_run_command

        cfg = resolve_config(None)
        cmd = docker_run_command("img", tmp_path, cfg, {}, ["true"], interactive=True)
        assert "--cpus" not in cmd
        assert "--memory" not in cmd
        assert "-it" in cmd

    def test_run_in_container_returns_exit_code_and_creates_cache(self, tmp_path: Path) -> None:
        from kmake_tooling.docker import run_in_container

        with patch("subprocess.run", return_value=MagicMock(returncode=2)):
            rc = run_in_container("img", tmp_path, resolve_config(None), {}, ["make"])
        assert rc == 2
        assert (tmp_path / ".ccache").is_dir()
