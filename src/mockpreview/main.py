"""Main CLI entry point for mockpreview."""

import logging
import sys
import click
from pathlib import Path
from rich.console import Console
from .config import Config
from .artifact import load_artifact
from .analyzer.batch import BatchAnalyzer
from .analyzer.prompt_builder import PromptBuilder
from .errors import (
    ArtifactFormatError,
    ArtifactMissingError,
    BundlerInvocationError,
    ConfigurationError,
    ScaffoldError,
)
from .llm.provider import create_llm_provider
from .scanner.context import ProjectContextCollector
from .scaffold.bundler import ViteBundler
from .scaffold.dashboard import DashboardAssembler
from .scaffold.generator import ScaffoldGenerator


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """mockpreview - Preview UI components in isolation with AI-generated mock data."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path())
@click.option("--output", "-o", type=click.Path(), help="Analysis file path (default: analysis.json)")
@click.option("--delay", type=float, help="Seconds to wait between model calls (default: 4)")
@click.option("--no-network", is_flag=True, help="Only ask for props and wrappers, not network mocks")
def analyze(files: tuple[str, ...], output: str | None, delay: float | None, no_network: bool):
    """Analyze component files and write mock data to the analysis file.

    Examples:
        mockpreview analyze src/UserCard.jsx

        mockpreview analyze src/UserCard.jsx src/TaskList.tsx -o previews.json
    """
    config = _apply_overrides(
        Config.from_env(), analysis_path=output, request_delay=delay, no_network=no_network
    )
    sys.exit(_run_analyze(list(files), config))


@cli.command()
@click.option("--analysis", "-a", type=click.Path(), help="Analysis file to read (default: analysis.json)")
@click.option("--out-dir", type=click.Path(file_okay=False), help="Where to write preview files")
@click.option("--skip-bundle", is_flag=True, help="Generate files and config without running the bundler")
def build(analysis: str | None, out_dir: str | None, skip_bundle: bool):
    """Generate preview pages and the dashboard, then build them with Vite.

    Examples:
        mockpreview build

        mockpreview build --out-dir previews --skip-bundle
    """
    config = _apply_overrides(Config.from_env(), analysis_path=analysis, output_dir=out_dir)
    sys.exit(_run_build(config, skip_bundle=skip_bundle))


@cli.command()
@click.option("--runtime-dir", type=click.Path(file_okay=False), help="Where to install the packages")
def setup(runtime_dir: str | None):
    """Install mockpreview's own copies of React and its providers.

    Previews resolve react, react-dom, react-router-dom and
    @tanstack/react-query from this directory instead of the project.

    Examples:
        mockpreview setup
    """
    config = Config.from_env()
    if runtime_dir:
        config = config.model_copy(update={"runtime_dir": Path(runtime_dir)})

    click.echo(f"📦 Installing preview runtime into {config.runtime_dir}...")
    try:
        _create_bundler(config).install_runtime(config.npm_command)
    except BundlerInvocationError as e:
        click.echo(f"❌ Setup failed: {e}", err=True)
        sys.exit(1)

    click.echo("✅ Preview runtime ready.")
    sys.exit(0)


@cli.command()
@click.argument("file", type=click.Path())
def preview(file: str):
    """Analyze one component and build its preview.

    Examples:
        mockpreview preview src/UserCard.jsx
    """
    config = Config.from_env()
    click.echo(f"🚀 Starting preview for: {file}")

    click.echo("\n--- STEP 1: ANALYZING ---")
    code = _run_analyze([file], config)
    if code != 0:
        sys.exit(code)

    click.echo("\n--- STEP 2: BUILDING ---")
    code = _run_build(config)
    if code != 0:
        sys.exit(code)

    bundler = _create_bundler(config)
    click.echo(f"\n✅ Done! Run '{bundler.preview_command()}' to see the result.")
    sys.exit(0)


def _apply_overrides(
    config: Config,
    analysis_path: str | None = None,
    request_delay: float | None = None,
    no_network: bool = False,
    output_dir: str | None = None,
) -> Config:
    updates = {}
    if analysis_path:
        updates["analysis_path"] = Path(analysis_path)
    if request_delay is not None:
        updates["request_delay"] = request_delay
    if no_network:
        updates["analyze_network"] = False
    if output_dir:
        updates["output_dir"] = Path(output_dir)
    return config.model_copy(update=updates)


def _run_analyze(files: list[str], config: Config) -> int:
    """Analyze ``files`` and write the artifact. Returns an exit code."""
    if not files:
        click.echo("Error: You must provide at least one component path", err=True)
        return 1

    try:
        llm = create_llm_provider(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        return 1

    click.echo(f"🧠 Analyzing {len(files)} file(s) with {config.model_name}...")
    analyzer = BatchAnalyzer(
        llm,
        collector=ProjectContextCollector(readme_char_limit=config.readme_char_limit),
        prompt_builder=PromptBuilder(network_aware=config.analyze_network),
        delay=config.request_delay,
        console=Console(),
    )
    report = analyzer.analyze_and_save(files, config.analysis_path)

    skipped = [o.path for o in report.outcomes if o.status == "skipped"]
    if skipped:
        click.echo(f"   Skipped (not found): {', '.join(skipped)}")
    for failure in report.failures:
        click.echo(f"⚠️  {failure.path}: {failure.message} (using empty mock data)", err=True)

    click.echo(
        f"   {len(report.artifact)} analyzed, {len(report.failures)} with fallback data "
        f"in {report.elapsed_seconds:.1f}s"
    )
    return 0


def _create_bundler(config: Config) -> ViteBundler:
    return ViteBundler(
        root=config.output_dir,
        runtime_dir=config.runtime_dir,
        command=config.bundler_command,
        build_dir=config.build_dir,
    )


def _run_build(config: Config, skip_bundle: bool = False) -> int:
    """Scaffold previews from the artifact and run the bundler. Returns an exit code."""
    click.echo("🏗️  Starting preview build...")

    try:
        artifact = load_artifact(config.analysis_path)
    except (ArtifactMissingError, ArtifactFormatError) as e:
        click.echo(f"❌ {e}", err=True)
        return 1

    try:
        generator = ScaffoldGenerator(config.output_dir)
        entries = generator.generate_all(artifact)
        for entry in entries:
            click.echo(f"   ✅ {entry.host_page_path.name} -> {entry.original_path}")

        dashboard = DashboardAssembler(config.output_dir, generator.build_token).assemble(entries)
        click.echo(f"   📋 Dashboard: {dashboard.host_page_path.name}")

        bundler = _create_bundler(config)
        config_path = bundler.write_config(entries, dashboard.host_page_path)
    except (ScaffoldError, OSError) as e:
        click.echo(f"❌ Could not generate preview files: {e}", err=True)
        return 1

    click.echo(f"   ⚙️  Bundler config: {config_path}")

    if skip_bundle:
        click.echo("⏭️  Skipping bundler run")
        return 0

    try:
        bundler.build(config_path)
    except BundlerInvocationError as e:
        click.echo(f"❌ Build failed: {e}", err=True)
        return 1

    click.echo("🎉 Build complete!")
    return 0


if __name__ == "__main__":
    cli()
