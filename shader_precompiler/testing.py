"""Test doubles for shader_precompiler: use in orchestration tests.

Usage::

    from shader_precompiler.testing import FakeCompilerInvoker

    invoker = FakeCompilerInvoker()                             # every compile succeeds
    invoker = FakeCompilerInvoker(failures={"bad_ps.hlsl"})     # these fail with an error
    invoker = FakeCompilerInvoker(timeouts={"slow_ps.hlsl"})    # these time out
"""

from __future__ import annotations

from pathlib import Path

from shader_precompiler.build.invoker import CompilerInvoker
from shader_precompiler.models.build import BuildOptions, CompileResult, CompileStatus, ShaderStage


class FakeCompilerInvoker(CompilerInvoker):
    """Drop-in CompilerInvoker that never spawns a process.

    Successful compiles write the artifact (and the debug companion when the
    options request one) so freshness checks behave like a real run.
    Failures and timeouts are selected by file name.
    """

    def __init__(
        self,
        *,
        failures: set[str] | None = None,
        timeouts: set[str] | None = None,
        output: str = "",
    ) -> None:
        self._failures = failures or set()
        self._timeouts = timeouts or set()
        self._output = output
        self._calls: list[tuple[Path, ShaderStage]] = []

    @property
    def calls(self) -> list[tuple[Path, ShaderStage]]:
        """(source, stage) pairs received: useful for assertions in tests."""
        return self._calls

    @property
    def compiled_names(self) -> list[str]:
        return [p.name for p, _ in self._calls]

    def invoke(self, source: Path, stage: ShaderStage, options: BuildOptions) -> CompileResult:
        self._calls.append((source, stage))
        cmd = self.build_command(source, stage, options)

        if source.name in self._timeouts:
            return CompileResult(status=CompileStatus.TIMEOUT, command=cmd)
        if source.name in self._failures:
            return CompileResult(
                status=CompileStatus.COMPILE_ERROR,
                command=cmd,
                output=f"{source}(1,1): error X3000: syntax error\n",
                returncode=1,
            )

        options.artifact_path(source).write_bytes(b"DXBC")
        if options.emits_debug_info:
            options.debug_info_path(source).write_bytes(b"PDB")
        return CompileResult(status=CompileStatus.SUCCESS, command=cmd, output=self._output, returncode=0)
