"""Tests for CompilerInvoker: subprocess is mocked, no fxc needed."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

from shader_precompiler.build.invoker import CompilerInvoker
from shader_precompiler.models.build import CompileStatus, ShaderStage


class TestBuildCommand:
    def test_release_command(self, tmp_path: Path, make_options):
        src = tmp_path / "sky_ps.hlsl"
        cmd = CompilerInvoker().build_command(src, ShaderStage.PIXEL, make_options())
        assert cmd == [
            "fxc.exe",
            "/nologo",
            "/T",
            "ps_5_0",
            "/E",
            "main",
            "/Fo",
            str(tmp_path / "sky_ps.cso"),
            str(src),
        ]

    def test_shader_model_version(self, tmp_path: Path, make_options):
        cmd = CompilerInvoker().build_command(
            tmp_path / "a_hs.hlsl", ShaderStage.HULL, make_options(shader_model_version="4_1")
        )
        assert cmd[3] == "hs_4_1"

    def test_debug_without_pdb_support(self, tmp_path: Path, make_options):
        cmd = CompilerInvoker().build_command(tmp_path / "a_vs.hlsl", ShaderStage.VERTEX, make_options(debug=True))
        assert "/Od" in cmd
        assert "/Zi" not in cmd
        assert cmd[-1] == str(tmp_path / "a_vs.hlsl")

    def test_debug_with_pdb_support(self, tmp_path: Path, make_options):
        cmd = CompilerInvoker().build_command(
            tmp_path / "a_vs.hlsl",
            ShaderStage.VERTEX,
            make_options(debug=True, can_generate_pdbs=True),
        )
        i = cmd.index("/Od")
        assert cmd[i + 1 : i + 4] == ["/Zi", "/Fd", str(tmp_path / "a_vs.pdb")]

    def test_pdb_support_without_debug_adds_nothing(self, tmp_path: Path, make_options):
        cmd = CompilerInvoker().build_command(
            tmp_path / "a_vs.hlsl", ShaderStage.VERTEX, make_options(can_generate_pdbs=True)
        )
        assert "/Od" not in cmd
        assert "/Zi" not in cmd


class TestInvoke:
    def test_success(self, tmp_path: Path, make_options):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="compilation succeeded\n")
        with patch("shader_precompiler.build.invoker.subprocess.run", return_value=completed) as run:
            result = CompilerInvoker().invoke(tmp_path / "a_vs.hlsl", ShaderStage.VERTEX, make_options())
        assert result.status is CompileStatus.SUCCESS
        assert result.ok
        assert result.output == "compilation succeeded\n"
        assert run.call_args.kwargs["timeout"] == 30.0

    def test_nonzero_exit_is_compile_error(self, tmp_path: Path, make_options):
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="error X3000\n")
        with patch("shader_precompiler.build.invoker.subprocess.run", return_value=completed):
            result = CompilerInvoker().invoke(tmp_path / "a_vs.hlsl", ShaderStage.VERTEX, make_options())
        assert result.status is CompileStatus.COMPILE_ERROR
        assert result.returncode == 1
        assert "X3000" in result.output

    def test_timeout(self, tmp_path: Path, make_options):
        with patch(
            "shader_precompiler.build.invoker.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="fxc", timeout=30),
        ):
            result = CompilerInvoker().invoke(tmp_path / "e_ps.hlsl", ShaderStage.PIXEL, make_options())
        assert result.status is CompileStatus.TIMEOUT
        assert not result.ok

    def test_missing_compiler_is_compile_error(self, tmp_path: Path, make_options):
        with patch(
            "shader_precompiler.build.invoker.subprocess.run",
            side_effect=FileNotFoundError("fxc.exe"),
        ):
            result = CompilerInvoker().invoke(tmp_path / "a_vs.hlsl", ShaderStage.VERTEX, make_options())
        assert result.status is CompileStatus.COMPILE_ERROR
        assert "failed to launch compiler" in result.output

    def test_none_stdout(self, tmp_path: Path, make_options):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=None)
        with patch("shader_precompiler.build.invoker.subprocess.run", return_value=completed):
            result = CompilerInvoker().invoke(tmp_path / "a_vs.hlsl", ShaderStage.VERTEX, make_options())
        assert result.output == ""
