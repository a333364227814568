"""Shader precompiler: incremental build decisions for HLSL shader trees."""

__version__ = "0.1.0"

from shader_precompiler.build.classifier import ShaderClassifier
from shader_precompiler.build.includes import IncludeGraphResolver
from shader_precompiler.build.invoker import CompilerInvoker
from shader_precompiler.build.policy import BuildPolicyEngine
from shader_precompiler.build.sweeper import CleanSweeper
from shader_precompiler.build.walker import DirectoryWalker
from shader_precompiler.models.build import (
    BuildAction,
    BuildOptions,
    CompileResult,
    CompileStatus,
    ShaderStage,
)
from shader_precompiler.orchestrator import ShaderBuildOrchestrator
from shader_precompiler.progress import BuildReport

__all__ = [
    "BuildAction",
    "BuildOptions",
    "BuildPolicyEngine",
    "BuildReport",
    "CleanSweeper",
    "CompileResult",
    "CompileStatus",
    "CompilerInvoker",
    "DirectoryWalker",
    "IncludeGraphResolver",
    "ShaderBuildOrchestrator",
    "ShaderClassifier",
    "ShaderStage",
]
