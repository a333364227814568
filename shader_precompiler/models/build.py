"""Data models for shader classification, build decisions and compile results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ShaderStage(Enum):
    """Shader pipeline stage. The value is the compiler profile prefix."""

    VERTEX = "vs"
    PIXEL = "ps"
    GEOMETRY = "gs"
    HULL = "hs"
    DOMAIN = "ds"

    def profile(self, shader_model_version: str) -> str:
        return f"{self.value}_{shader_model_version}"


class BuildAction(Enum):
    """What the policy engine decided for one classified source file."""

    SKIP = "skip"
    DELETE_STALE = "delete_stale"
    COMPILE = "compile"


class CompileStatus(Enum):
    SUCCESS = "success"
    COMPILE_ERROR = "compile_error"
    TIMEOUT = "timeout"


class OutcomeKind(Enum):
    """Per-file result recorded in the build report."""

    COMPILED = "compiled"
    SKIPPED = "skipped"
    DELETED = "deleted"
    UNCLASSIFIED = "unclassified"
    FAILED = "failed"


@dataclass(frozen=True)
class BuildOptions:
    """Configuration for one run. Read-only; passed explicitly to every component."""

    input_dir: Path
    compiler_path: str = "fxc.exe"
    force_build: bool = False
    clean_build: bool = False
    debug: bool = False
    can_generate_pdbs: bool = False
    shader_model_version: str = "5_0"
    compile_timeout: float = 30.0
    source_extension: str = ".hlsl"
    artifact_extension: str = ".cso"
    debug_extension: str = ".pdb"
    entry_point: str = "main"

    @property
    def emits_debug_info(self) -> bool:
        return self.debug and self.can_generate_pdbs

    def artifact_path(self, source: Path) -> Path:
        return source.with_suffix(self.artifact_extension)

    def debug_info_path(self, source: Path) -> Path:
        return source.with_suffix(self.debug_extension)


@dataclass(frozen=True)
class ShaderSourceFile:
    """A classified shader source, built per walk step and discarded afterwards."""

    path: Path
    stage: ShaderStage
    precompile_eligible: bool
    # None when not needed for the decision (opted-out files)
    effective_modified_time: int | None = None


@dataclass(frozen=True)
class CompiledArtifact:
    """Filesystem view of a compiled output and its optional debug companion."""

    path: Path
    exists: bool
    modified_time: int | None = None
    debug_info_path: Path | None = None

    @classmethod
    def observe(cls, path: Path, debug_info_path: Path | None = None) -> CompiledArtifact:
        try:
            st = path.stat()
        except FileNotFoundError:
            return cls(path=path, exists=False, debug_info_path=debug_info_path)
        return cls(
            path=path,
            exists=True,
            modified_time=st.st_mtime_ns,
            debug_info_path=debug_info_path,
        )


@dataclass
class CompileResult:
    """Result of one external compiler invocation."""

    status: CompileStatus
    command: list[str]
    output: str = ""
    returncode: int | None = None
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is CompileStatus.SUCCESS


@dataclass
class FileOutcome:
    path: Path
    kind: OutcomeKind
    stage: ShaderStage | None = None
    action: BuildAction | None = None
    detail: str = ""
    compile_result: CompileResult | None = field(default=None, repr=False)
