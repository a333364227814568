"""External compiler invocation (fxc-compatible command line)."""

from __future__ import annotations

import subprocess
import time
from pathlib import Path

import structlog

from shader_precompiler.models.build import BuildOptions, CompileResult, CompileStatus, ShaderStage

log = structlog.get_logger("shader_precompiler.compiler")


class CompilerInvoker:
    """Build the compiler command line for one shader and run it synchronously."""

    def build_command(self, source: Path, stage: ShaderStage, options: BuildOptions) -> list[str]:
        """Return argv of the shape::

            <fxc> /nologo /T <stage>_<version> /E main /Fo <out> [/Od [/Zi /Fd <pdb>]] <input>
        """
        cmd = [
            options.compiler_path,
            "/nologo",
            "/T",
            stage.profile(options.shader_model_version),
            "/E",
            options.entry_point,
            "/Fo",
            str(options.artifact_path(source)),
        ]
        if options.debug:
            cmd.append("/Od")
            if options.can_generate_pdbs:
                cmd += ["/Zi", "/Fd", str(options.debug_info_path(source))]
        cmd.append(str(source))
        return cmd

    def invoke(self, source: Path, stage: ShaderStage, options: BuildOptions) -> CompileResult:
        cmd = self.build_command(source, stage, options)
        log.debug("compiler.invoke", cmd=cmd, timeout=options.compile_timeout)
        started = time.monotonic()
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=options.compile_timeout,
            )
        except subprocess.TimeoutExpired:
            log.error("compiler.timeout", path=str(source), timeout=options.compile_timeout)
            return CompileResult(
                status=CompileStatus.TIMEOUT,
                command=cmd,
                duration=round(time.monotonic() - started, 2),
            )
        except OSError as exc:
            log.error("compiler.launch_failed", path=str(source), error=str(exc))
            return CompileResult(
                status=CompileStatus.COMPILE_ERROR,
                command=cmd,
                output=f"{source}(1,1): error - failed to launch compiler: {exc}\n",
                duration=round(time.monotonic() - started, 2),
            )

        status = CompileStatus.SUCCESS if proc.returncode == 0 else CompileStatus.COMPILE_ERROR
        return CompileResult(
            status=status,
            command=cmd,
            output=proc.stdout or "",
            returncode=proc.returncode,
            duration=round(time.monotonic() - started, 2),
        )
