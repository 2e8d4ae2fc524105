"""CLI entry point for the script generator."""

import asyncio
import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from . import __version__
from .budget import SceneBudget, scene_budget
from .config import config
from .errors import ScriptgenError
from .inspection import inspect_script
from .library import JsonScriptLibrary
from .models import (
    AnalysisRequest,
    GenerationResult,
    ReferenceImage,
    SeriesRequest,
)

app = typer.Typer(
    name="script-maker",
    help="AI-powered competitive script and series generator",
    no_args_is_help=True
)
library_app = typer.Typer(help="Manage saved scripts", no_args_is_help=True)
app.add_typer(library_app, name="library")


class ExportFormat(str, Enum):
    """Export file formats."""
    JSON = "json"
    YAML = "yaml"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"script-maker version {__version__}")
        raise typer.Exit()


def get_library() -> JsonScriptLibrary:
    """Return the library at the configured path."""
    return JsonScriptLibrary(config.library_path)


def _check_config() -> None:
    try:
        config.validate_required()
    except ScriptgenError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)


def _run_generation(request) -> GenerationResult:
    """Run the scriptwriter agent for a request, exiting on failure."""
    from .agents import ScriptwriterAgent

    try:
        agent = ScriptwriterAgent()
        typer.echo(f"   Using model: {agent.model}")
        typer.echo("   Generating script...")
        return asyncio.run(agent.run(request))
    except ScriptgenError as e:
        typer.echo(f"❌ Error generating script: {e.message}")
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"❌ Error generating script: {e}")
        raise typer.Exit(1)


def _finish(result: GenerationResult, plan: SceneBudget, save: bool, output: Optional[Path]) -> None:
    """Print a summary, then save and export the result as requested."""
    script = result.optimized_script
    typer.echo(f"\n✅ Generated: {result.id}")
    typer.echo(f"   Title: {script.seo.title}")
    typer.echo(f"   Scenes: {len(script.intro)} intro, {len(script.body)} body, {len(script.outro)} outro")
    typer.echo(f"   Characters: {', '.join(c.name for c in script.overview.characters)}")

    report = inspect_script(script, plan, result.series_bible)
    if not report.clean:
        typer.echo(f"\n⚠️  {report}")

    typer.echo("\n💡 Title ideas:")
    for title in result.suggestions.titles:
        typer.echo(f"   • {title}")

    if save:
        get_library().save(result)
        typer.echo(f"\n📚 Saved to library: {config.library_path}")

    if output:
        _write(result.to_dict(), output)
        typer.echo(f"📄 Result written: {output}")


def _write(data: dict, output: Path) -> None:
    """Write data as YAML or JSON depending on the file extension."""
    import yaml

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        if output.suffix.lower() in (".yaml", ".yml"):
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        else:
            json.dump(data, f, ensure_ascii=False, indent=2)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Script Maker - Outperform a reference video and continue it as a series."""
    pass


@app.command()
def budget(
    minutes: int = typer.Argument(..., help="Target duration in minutes", min=1)
) -> None:
    """Show the scene budget for a duration."""
    result = scene_budget(minutes)
    typer.echo(f"🎞️  {minutes} min → target {result.target} scenes (allowed {result.min}-{result.max})")


@app.command()
def keywords(
    url: str = typer.Argument(..., help="Reference video URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Suggest SEO keywords for a reference video."""
    from .agents import KeywordAgent

    setup_logging(verbose)
    _check_config()

    try:
        agent = KeywordAgent()
        suggested = asyncio.run(agent.run(url))
    except ScriptgenError as e:
        typer.echo(f"❌ {e.message}")
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"❌ Error suggesting keywords: {e}")
        raise typer.Exit(1)

    typer.echo(f"🔑 Keywords for {url}:")
    for keyword in suggested:
        typer.echo(f"   • {keyword}")


@app.command()
def analyze(
    url: str = typer.Argument(..., help="Competitor video URL to analyse"),
    angle: str = typer.Option(..., "--angle", "-a", help="Your competitive angle or goal"),
    duration: int = typer.Option(5, "--duration", "-d", help="Target duration in minutes", min=1, max=120),
    genre: str = typer.Option("Story", "--genre", "-g", help="Genre or style (include '3D' for animation)"),
    language: str = typer.Option("Vietnamese", "--language", "-l", help="Dialogue language"),
    voice: str = typer.Option("Warm female narrator", "--voice", help="Narration voice"),
    channel: Optional[str] = typer.Option(None, "--channel", "-c", help="Your own video/channel URL"),
    images: List[Path] = typer.Option(
        [], "--image", "-i", help="Reference style image (repeatable)", exists=True, dir_okay=False
    ),
    target_keywords: List[str] = typer.Option([], "--keyword", "-k", help="Target SEO keyword (repeatable)"),
    suggested_keywords: List[str] = typer.Option([], "--suggested", help="Suggested keyword (repeatable)"),
    save: bool = typer.Option(True, "--save/--no-save", help="Save the result to the library"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the result (.json or .yaml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Analyse a competitor video and write a superior script."""
    setup_logging(verbose)

    try:
        request = AnalysisRequest(
            duration_minutes=duration,
            genre=genre,
            language=language,
            voice=voice,
            video_url=url,
            channel_url=channel,
            reference_images=[ReferenceImage.from_path(path) for path in images],
            competitive_angle=angle,
            target_keywords=target_keywords,
            suggested_keywords=suggested_keywords,
        )
    except ScriptgenError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    _check_config()
    plan = scene_budget(duration)
    typer.echo(f"🎬 Analysing: {url}")
    typer.echo(f"   Duration: {duration} min ({plan.min}-{plan.max} scenes)")
    if images:
        typer.echo(f"   Reference images: {len(images)}")

    result = _run_generation(request)
    _finish(result, plan, save, output)


@app.command(name="continue")
def continue_series(
    topic: str = typer.Option(..., "--topic", "-t", help="Topic of the new episode"),
    from_id: Optional[str] = typer.Option(
        None, "--from", "-f", help="Saved result to continue (uses its bible and last scene)"
    ),
    bible: Optional[Path] = typer.Option(None, "--bible", "-b", help="Series bible JSON file", dir_okay=False),
    last_scene: Optional[Path] = typer.Option(
        None, "--last-scene", "-s", help="Last scene JSON file of the previous episode", dir_okay=False
    ),
    duration: int = typer.Option(5, "--duration", "-d", help="Target duration in minutes", min=1, max=120),
    genre: str = typer.Option("Story", "--genre", "-g", help="Genre or style"),
    language: str = typer.Option("Vietnamese", "--language", "-l", help="Dialogue language"),
    voice: str = typer.Option("Warm female narrator", "--voice", help="Narration voice"),
    save: bool = typer.Option(True, "--save/--no-save", help="Save the result to the library"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the result (.json or .yaml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Write the next episode of a series."""
    setup_logging(verbose)

    if from_id:
        previous = get_library().get(from_id)
        if previous is None:
            typer.echo(f"❌ No saved script with id {from_id}")
            raise typer.Exit(1)
        if previous.series_bible is None or previous.last_scene() is None:
            typer.echo(f"❌ {from_id} has no series bible or scenes to continue from")
            raise typer.Exit(1)
        bible_json = previous.series_bible.to_json()
        last_scene_json = previous.last_scene().to_json()
    elif bible and last_scene:
        try:
            bible_json = bible.read_text(encoding="utf-8")
            last_scene_json = last_scene.read_text(encoding="utf-8")
        except OSError as e:
            typer.echo(f"❌ Error reading input: {e}")
            raise typer.Exit(1)
    else:
        typer.echo("❌ Provide --from ID, or both --bible and --last-scene")
        raise typer.Exit(1)

    try:
        request = SeriesRequest(
            duration_minutes=duration,
            genre=genre,
            language=language,
            voice=voice,
            bible_json=bible_json,
            last_scene_json=last_scene_json,
            episode_topic=topic,
        )
    except ScriptgenError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    _check_config()
    plan = scene_budget(duration)
    typer.echo(f"📺 Continuing series: {topic}")
    typer.echo(f"   Duration: {duration} min ({plan.min}-{plan.max} scenes)")

    result = _run_generation(request)
    _finish(result, plan, save, output)


@library_app.command("list")
def library_list() -> None:
    """List saved scripts, most recent first."""
    entries = get_library().list()
    if not entries:
        typer.echo("📚 Library is empty")
        return

    typer.echo(f"📚 {len(entries)} saved script(s):")
    for entry in entries:
        typer.echo(f"   • {entry.id}: {entry.optimized_script.seo.title}")


@library_app.command("show")
def library_show(
    result_id: str = typer.Argument(..., help="Saved result id"),
) -> None:
    """Show a saved script."""
    entry = get_library().get(result_id)
    if entry is None:
        typer.echo(f"❌ No saved script with id {result_id}")
        raise typer.Exit(1)

    script = entry.optimized_script
    typer.echo(f"📁 {entry.id}: {script.seo.title}")
    typer.echo(f"   {script.overview.summary}")
    typer.echo(f"   Visual style: {script.overview.visual_style}")

    analysis = entry.competitor_analysis
    if analysis.content_gaps:
        typer.echo("\n🔍 Content gaps:")
        for gap in analysis.content_gaps:
            typer.echo(f"   • {gap}")

    typer.echo("\n📽️  Scenes:")
    for scene in script.scenes():
        dialogue = scene.motion_prompt.dialogue
        typer.echo(f"   {scene.scene_number:>3}. {scene.setting}")
        if dialogue:
            typer.echo(f"        → {dialogue}")


@library_app.command("delete")
def library_delete(
    result_id: str = typer.Argument(..., help="Saved result id"),
) -> None:
    """Delete a saved script."""
    if not get_library().delete(result_id):
        typer.echo(f"❌ No saved script with id {result_id}")
        raise typer.Exit(1)
    typer.echo(f"🗑️  Deleted {result_id}")


@app.command()
def export(
    result_id: str = typer.Argument(..., help="Saved result id"),
    output: Path = typer.Option(..., "--output", "-o", help="Output file path"),
    bible_only: bool = typer.Option(False, "--bible", help="Export only the series bible"),
    output_format: ExportFormat = typer.Option(ExportFormat.JSON, "--format", "-f", help="Output format"),
) -> None:
    """Export a saved script or its series bible."""
    entry = get_library().get(result_id)
    if entry is None:
        typer.echo(f"❌ No saved script with id {result_id}")
        raise typer.Exit(1)

    if bible_only:
        if entry.series_bible is None:
            typer.echo(f"❌ {result_id} has no series bible")
            raise typer.Exit(1)
        data = entry.series_bible.to_dict()
    else:
        data = entry.to_dict()

    # Ensure output has correct extension
    output = output.with_suffix(f".{output_format.value}")
    try:
        _write(data, output)
    except OSError as e:
        typer.echo(f"❌ Error writing export: {e}")
        raise typer.Exit(1)
    typer.echo(f"✅ Exported: {output}")


if __name__ == "__main__":
    app()
