"""CLI entry point for standalone usage: shader-precompile.

Subcommands:
    shader-precompile build shaders/ --debug     # Incremental build of a shader tree
    shader-precompile probe shaders/             # Show what a build would do
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shader_precompiler.core.logging import setup_logging
from shader_precompiler.exceptions import InputDirectoryError
from shader_precompiler.models.build import BuildAction, BuildOptions


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Shader precompiler: incremental fxc builds for a tree of HLSL shaders."""
    setup_logging(verbose=verbose)


@main.command("build")
@click.argument("input_dir", required=False)
@click.option("--force", is_flag=True, help="Rebuild every shader even if it seems up to date")
@click.option("--clean", is_flag=True, help="Remove compiled .cso/.pdb files before compiling")
@click.option("--debug", is_flag=True, help="Disable optimizations (and emit PDBs when supported)")
@click.option("--shader-model", default=None, help="Shader model version, e.g. 5_0")
@click.option("--compiler", default=None, help="Path to fxc")
@click.option(
    "--pdbs/--no-pdbs",
    default=None,
    help="Whether fxc can write PDB files (probed from the compiler when omitted)",
)
def build(
    input_dir: str | None,
    force: bool,
    clean: bool,
    debug: bool,
    shader_model: str | None,
    compiler: str | None,
    pdbs: bool | None,
) -> None:
    """Compile every stale shader under INPUT_DIR (default: current directory)."""
    from shader_precompiler.config import load_options
    from shader_precompiler.orchestrator import ShaderBuildOrchestrator

    # Debug-info support only matters when PDBs are written or cleaned.
    if pdbs is None and not (debug or clean):
        pdbs = False

    try:
        options = load_options(
            input_dir,
            force=force,
            clean=clean,
            debug=debug,
            shader_model=shader_model,
            compiler=compiler,
            pdbs=pdbs,
        )
    except InputDirectoryError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    report = ShaderBuildOrchestrator(emit=lambda text: click.echo(text, nl=False)).run(options)

    counts = report.counts()
    click.echo(
        f"\nShaders: {counts['compiled']} compiled, {counts['skipped']} up to date, "
        f"{counts['deleted']} removed, {counts['unclassified']} unclassified, "
        f"{counts['failed']} failed"
    )
    if report.success:
        click.echo("All shaders compiled successfully.")
    else:
        click.echo("ERROR: some shaders failed to compile.")
        sys.exit(1)


@main.command("probe")
@click.argument("input_dir", required=False)
@click.option("--force", is_flag=True, help="Plan as if --force were given")
def probe(input_dir: str | None, force: bool) -> None:
    """Show shader classification and planned actions without building."""
    from shader_precompiler.probe import ShaderTreeProbe

    options = BuildOptions(input_dir=Path(input_dir) if input_dir else Path.cwd(), force_build=force)
    try:
        info = ShaderTreeProbe().probe(options)
    except InputDirectoryError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    click.echo(f"Input: {info.input_dir}")
    click.echo("\nStages:")
    for stage, count in sorted(info.stage_counts.items()):
        click.echo(f"  {stage}: {count}")
    click.echo(f"\nUnclassified: {len(info.unclassified)}")
    for path in info.unclassified:
        click.echo(f"  {path}")
    click.echo(f"Opted out: {len(info.opted_out)}")

    click.echo("\nPlan:")
    icon = {BuildAction.COMPILE: "+", BuildAction.SKIP: "-", BuildAction.DELETE_STALE: "x"}
    for p in info.planned:
        if p.action is None:
            click.echo(f"  [!] {p.path} - {p.error}")
        else:
            click.echo(f"  [{icon[p.action]}] {p.path}")


if __name__ == "__main__":
    main()
