from __future__ import annotations

import json
from pathlib import Path

import click

from ..pipeline import run_analysis, write_html_report
from ..plugin import PluginError, load_plugin_file
from ..rendering import load_stylesheet
from .layout import ProjectLayout, list_projects

ROOT_OPTION = click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Language folder holding corpus/, dics/ and output/.",
)


@click.group(name="project")
def project_group() -> None:
    """Commands that work on a language workspace folder."""


@project_group.command("list")
@ROOT_OPTION
def project_list(root: Path) -> None:
    """List the projects found under corpus/."""
    for name in list_projects(root):
        click.echo(name)


@project_group.command("analyze")
@click.argument("project")
@ROOT_OPTION
@click.option("--language", default="default", show_default=True)
@click.option(
    "--plugins-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Folder with <language>.json and <language>.css (default: <root>/plugins).",
)
@click.option("--json-output", type=click.Path(path_type=Path), default=None)
@click.option("--html/--no-html", default=True, show_default=True)
@click.option("--progress", is_flag=True, default=False, help="Report progress on stderr.")
def project_analyze(
    project: str,
    root: Path,
    language: str,
    plugins_dir: Path | None,
    json_output: Path | None,
    html: bool,
    progress: bool,
) -> None:
    """Analyze every text of PROJECT and write annotated pages."""
    layout = ProjectLayout(
        root=root, project=project, language=language, plugins_dir=plugins_dir
    )
    files = layout.corpus_files()
    dictionaries = layout.dictionary_paths()
    if not files or not dictionaries:
        click.echo(f"Nothing to analyze in project '{project}'.")
        return
    layout.ensure_structure()

    plugin_path = layout.plugin_path()
    try:
        plugin = load_plugin_file(plugin_path) if plugin_path is not None else None
    except PluginError as exc:
        raise click.ClickException(str(exc)) from exc

    def _report(percent: float, name: str | None) -> None:
        click.echo(f"{percent:5.1f}% {name or ''}".rstrip(), err=True)

    run = run_analysis(
        dictionaries,
        files,
        plugin=plugin,
        progress=_report if progress else None,
        root=layout.corpus_dir,
    )
    stylesheet = load_stylesheet(layout.stylesheet_path())

    for name, analysis in run.files.items():
        click.echo(
            f"{name}: size={analysis.size} known={analysis.known} "
            f"maybe={analysis.maybe} unknown={analysis.unknown}"
        )
        if html:
            write_html_report(analysis, layout.output_dir, stylesheet)
    for failure in run.failures:
        click.echo(f"Skipped {failure.path}: {failure.reason}", err=True)

    if json_output is not None:
        payload = {
            "project": project,
            "language": language,
            "documents": [analysis.to_dict() for analysis in run.files.values()],
            "failures": [
                {"path": failure.path, "reason": failure.reason}
                for failure in run.failures
            ],
        }
        json_output.parent.mkdir(parents=True, exist_ok=True)
        json_output.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        click.echo(f"Wrote detailed JSON to {json_output}")


@project_group.command("add-word")
@click.argument("project")
@click.argument("word")
@ROOT_OPTION
def project_add_word(project: str, word: str, root: Path) -> None:
    """Append WORD to the project's common dictionary."""
    path = ProjectLayout(root=root, project=project).add_word(word)
    click.echo(f"Added '{word}' to {path}")
