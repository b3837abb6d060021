from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import typer
import yaml

from .config import CoverageConfig, load_config
from .dictionary import Provenance
from .pipeline import AnalysisRun, prepare_dictionary, run_analysis, write_html_report
from .plugin import ExpansionPlugin, PluginError, find_plugin_file, load_plugin_file
from .project.cli import project_group
from .rendering import load_stylesheet

app = typer.Typer(help="Vocabulary coverage analyzer CLI.", no_args_is_help=True)

# File types the CLI expands into documents when given a directory.
SUPPORTED_INPUT_EXTENSIONS = {".txt"}


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Vocabulary coverage analyzer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    dictionary: Optional[List[Path]] = typer.Option(
        None, "--dictionary", "-d", help="Dictionary text file (repeatable)."
    ),
    plugin: Path | None = typer.Option(
        None, "--plugin", "-p", exists=True, help="Expansion plugin (.json/.yaml)."
    ),
    stylesheet: Path | None = typer.Option(
        None, "--stylesheet", help="CSS file inlined into the HTML pages."
    ),
    output_path: Path | None = typer.Option(
        None, file_okay=False, help="Directory for the annotated HTML pages."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Classify the words of the input texts and emit a JSON summary."""
    cfg = load_config(config)
    dictionaries = [Path(path) for path in cfg.dictionary_paths] + list(dictionary or [])
    expansion = _load_plugin(cfg, plugin)
    files, root = _collect_inputs(input_path)

    progress = _echo_progress if cfg.progress else None
    run = run_analysis(dictionaries, files, plugin=expansion, progress=progress, root=root)

    target_dir = output_path or (Path(cfg.output_dir) if cfg.output_dir else None)
    if target_dir is not None and cfg.write_html:
        css = load_stylesheet(stylesheet or cfg.stylesheet_path)
        for analysis in run.files.values():
            write_html_report(analysis, target_dir, css)

    typer.echo(json.dumps(_build_summary(run), indent=2, ensure_ascii=False))


@app.command()
def expand(
    dictionary: List[Path] = typer.Option(
        ..., "--dictionary", "-d", help="Dictionary text file (repeatable)."
    ),
    plugin: Path | None = typer.Option(None, "--plugin", "-p", exists=True),
    expanded_only: bool = typer.Option(
        False, "--expanded-only", help="Only print forms derived by the plugin."
    ),
) -> None:
    """Print the dictionary after rule expansion, one word per line."""
    expansion = _load_plugin(CoverageConfig(), plugin)
    store = prepare_dictionary(dictionary, expansion)
    provenance = Provenance.EXPANDED if expanded_only else None
    for word in store.words(provenance):
        typer.echo(word)


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = CoverageConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    command = typer.main.get_command(app)
    command.add_command(project_group, "project")  # type: ignore[attr-defined]
    command()


def _load_plugin(config: CoverageConfig, plugin: Path | None) -> ExpansionPlugin | None:
    """Load the explicit plugin, or the configured language plugin when present."""
    path = plugin or find_plugin_file(
        Path(config.root_dir) / config.plugins_dir, config.language
    )
    if path is None:
        return None
    try:
        return load_plugin_file(path)
    except PluginError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _collect_inputs(input_path: Path) -> Tuple[List[Path], Path | None]:
    """Expand the input path into sorted text files plus the root used for ids."""
    if input_path.is_file():
        return [input_path], None
    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS
    )
    return files, input_path


def _build_summary(run: AnalysisRun) -> dict:
    return {
        "documents": [analysis.to_dict() for _, analysis in sorted(run.files.items())],
        "failures": [
            {"path": failure.path, "reason": failure.reason} for failure in run.failures
        ],
    }


def _echo_progress(percent: float, name: str | None) -> None:
    typer.echo(f"{percent:5.1f}% {name or ''}".rstrip(), err=True)


if __name__ == "__main__":
    main()
