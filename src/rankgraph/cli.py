"""rankgraph CLI entry point."""
from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click
import yaml

from rankgraph.config import CONFIG_FILENAMES, load_config
from rankgraph.engine import Engine, list_schema_types
from rankgraph.models import Page
from rankgraph.printer import Printer
from rankgraph.provider import InMemoryProvider
from rankgraph.registry import build_registry
from rankgraph.rule_options import list_rule_grammar_options
from rankgraph.variables import list_variables

logger = logging.getLogger("rankgraph")


def _configure_logging() -> None:
    level = os.environ.get("RANKGRAPH_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def _read_data(path: str | None) -> dict:
    """Read a YAML or JSON mapping; JSON parses as YAML."""
    if not path:
        return {}
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} does not contain a mapping")
    return data


def _provider_and_registry(content: str | None, project_dir: str):
    config = load_config(project_dir)
    provider = InMemoryProvider(_read_data(content))
    registry = build_registry(provider, custom_types_dir=config.custom_types_dir, project_dir=project_dir)
    return config, provider, registry


@click.group()
def main():
    """rankgraph - JSON-LD structured data for content sites."""
    _configure_logging()


@main.command()
@click.option("--page", "page_path", required=True, type=click.Path(exists=True, dir_okay=False),
              help="Page descriptor (JSON or YAML)")
@click.option("--content", required=True, type=click.Path(exists=True, dir_okay=False),
              help="Content fixture: site, posts, terms, users (JSON or YAML)")
@click.option("--json", "as_json", is_flag=True, help="Print bare JSON instead of a script tag")
@click.option("--project-dir", default=None, help="Project directory")
def render(page_path: str, content: str, as_json: bool, project_dir: str | None):
    """Render the JSON-LD graph for one page."""
    project_dir = project_dir or os.getcwd()
    config, provider, registry = _provider_and_registry(content, project_dir)

    try:
        page = Page.from_dict(_read_data(page_path))
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--page") from exc

    logger.debug("Rendering %s page %s", page.kind.value, page.url)
    document = Engine(config, registry, provider).render(page)
    printer = Printer(document, debug=config.debug)
    output = printer.format_json() if as_json else printer.format_script_tag()
    if output is None:
        click.echo("No schemas render on this page.", err=True)
        return
    click.echo(output)


@main.command("list-types")
@click.option("--content", default=None, type=click.Path(exists=True, dir_okay=False),
              help="Content fixture; enables Product when it has commerce data")
@click.option("--project-dir", default=None, help="Project directory")
def list_types(content: str | None, project_dir: str | None):
    """List all registered schema types."""
    project_dir = project_dir or os.getcwd()
    _, _, registry = _provider_and_registry(content, project_dir)
    types = list_schema_types(registry)

    click.echo(f"{'Type':<18} {'Fields':<8} {'Show on':<30} Docs")
    click.echo("-" * 90)
    for entry in types:
        definition = registry.catalog.get(entry["type"])
        show_on = ", ".join(definition.show_on.rules)
        click.echo(f"{entry['type']:<18} {len(entry['fields']):<8} {show_on:<30} {entry['docs_url']}")

    click.echo(f"\n{len(types)} types total.")


@main.command("list-rules")
@click.option("--consider", default=None, type=click.Choice(["single", "archive"]),
              help="Only rules relevant to single entities or archives")
@click.option("--content", default=None, type=click.Path(exists=True, dir_okay=False),
              help="Content fixture providing post types and taxonomies")
def list_rules(consider: str | None, content: str | None):
    """List the display rule tokens available for this site."""
    provider = InMemoryProvider(_read_data(content))
    groups = list_rule_grammar_options(provider, consider_type=consider)

    for group in groups.values():
        click.echo(f"{group['label']}:")
        for token, label in group["value"].items():
            click.echo(f"  {token:<40} {label}")


@main.command("list-variables")
@click.option("--content", default=None, type=click.Path(exists=True, dir_okay=False),
              help="Content fixture providing taxonomies and commerce data")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.option("--project-dir", default=None, help="Project directory")
def list_variables_command(content: str | None, as_json: bool, project_dir: str | None):
    """List the placeholders a field value may use."""
    project_dir = project_dir or os.getcwd()
    _, provider, registry = _provider_and_registry(content, project_dir)
    variables = list_variables(provider, registry)

    if as_json:
        click.echo(json.dumps(variables, indent=2))
        return
    for token, label in variables.items():
        click.echo(f"{token:<36} {label}")


@main.command()
@click.option("--project-dir", default=None, help="Project directory")
def init(project_dir: str | None):
    """Initialize rankgraph config in the project."""
    project_dir = project_dir or os.getcwd()
    config_content = """# rankgraph configuration

enable_schemas: true
debug: false  # pretty-print JSON output

# Placeholder expansion limits.
max_depth: 10
max_steps: 10000

# Site-wide schema set. Leave empty to use the built-in defaults.
schemas: []
  # - title: Article
  #   type: Article
  #   show_on:
  #     rules: [post|all]
  #   fields:
  #     "@id": "%current.url%#%id%"
  #     headline: "%post.title%"

# custom_types_dir: .rankgraph/types/
"""
    config_path = os.path.join(project_dir, CONFIG_FILENAMES[0])
    with open(config_path, "w") as f:
        f.write(config_content)

    click.echo(f"Created {config_path}")


@main.command()
@click.option("--project-dir", default=None, help="Project directory")
def status(project_dir: str | None):
    """Show rankgraph status for the current project."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as get_version

    project_dir = project_dir or os.getcwd()

    try:
        ver = get_version("rankgraph")
    except PackageNotFoundError:
        ver = "dev"

    config = load_config(project_dir)
    registry = build_registry(custom_types_dir=config.custom_types_dir, project_dir=project_dir)
    types = registry.catalog.names()

    enabled = "enabled" if config.enable_schemas else "disabled"
    schema_source = f"{len(config.schemas)} configured" if config.schemas else "built-in defaults"
    click.echo(f"rankgraph v{ver} | Schemas: {enabled} | Set: {schema_source}")
    click.echo(f"Types: {len(types)} registered ({', '.join(types)})")
