"""
wp-now — CLI entrypoint.

Usage:
    wp-now --help
    wp-now start --php 8.2 --wp 6.5
    wp-now detect
    wp-now config show
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from urllib.parse import urlsplit

import click

from wpnow import __version__
from wpnow.core.models.options import Mode
from wpnow.core.observability.logging_config import configure_cli_logging

_MODE_CHOICES = [m.value for m in Mode]

_MODE_ICONS = {
    Mode.CORE: "🧱",
    Mode.PLUGIN: "🔌",
    Mode.THEME: "🎨",
    Mode.WP_CONTENT: "📂",
    Mode.INDEX: "📄",
}

_path_option = click.option(
    "--path",
    "project_path",
    type=click.Path(file_okay=False, exists=True),
    default=None,
    help="Project directory (default: current directory).",
)
_json_option = click.option(
    "--json-output", "--json", "as_json", is_flag=True, help="Output as JSON."
)


@click.group()
@click.version_option(version=__version__, prog_name="wp-now")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to wp-now.yml (default: search upward from the project).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """wp-now — a local WordPress for the directory you are in."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    configure_cli_logging(verbose=verbose, quiet=quiet, debug=debug)


# ── start ───────────────────────────────────────────────────────────


@cli.command()
@_path_option
@click.option("--php", "php_version", default=None, help="PHP version (e.g. 8.2).")
@click.option("--wp", "wordpress_version", default=None, help="WordPress release (e.g. 6.5).")
@click.option(
    "--mode",
    type=click.Choice(_MODE_CHOICES),
    default=None,
    help="Project mode (default: auto-detect).",
)
@click.option("--port", type=int, default=None, help="Port the site is served on.")
@click.option("--runtime", default=None, help="Runtime name or 'package.module:factory'.")
@click.option("--mock", is_flag=True, help="Use the in-memory mock runtime.")
@_json_option
@click.pass_context
def start(
    ctx: click.Context,
    project_path: str | None,
    php_version: str | None,
    wordpress_version: str | None,
    mode: str | None,
    port: int | None,
    runtime: str | None,
    mock: bool,
    as_json: bool,
) -> None:
    """Provision WordPress, mount the project, install and log in."""
    from wpnow.adapters.base import Server
    from wpnow.core.use_cases.start import run_start

    result = run_start(
        cli_overrides={
            "project_path": project_path,
            "php_version": php_version,
            "wordpress_version": wordpress_version,
            "mode": mode,
            "port": port,
            "runtime": runtime,
        },
        config_path=ctx.obj.get("config_path"),
        mock_mode=mock,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.error:
        click.secho(f"❌ {result.error}", fg="red")

    if result.error:
        sys.exit(1)

    session = result.session
    assert session is not None  # guaranteed after error check above
    opts = session.options

    if not as_json and not ctx.obj.get("quiet", False):
        icon = _MODE_ICONS.get(opts.mode, "•")
        click.secho(f"\n{icon} {opts.mode} mode", fg="cyan", bold=True)
        click.echo(f"   📁 {opts.project_path}")
        click.echo(f"   🐘 PHP {opts.php_version}")
        if opts.uses_wordpress:
            click.echo(f"   📦 WordPress {opts.wordpress_version}")
            click.echo(f"   🗄  {opts.wp_content_path}")
        click.echo()

    if isinstance(session.runtime, Server):
        url = urlsplit(opts.absolute_url)
        if not as_json:
            click.secho(f"🚀 Serving {opts.absolute_url}", fg="green", bold=True)
        session.runtime.serve(url.hostname or "127.0.0.1", url.port or 80)
        return

    if not as_json:
        click.secho(f"✅ Ready at {opts.absolute_url}", fg="green", bold=True)
        click.echo("   (runtime does not serve HTTP; nothing left to run)")


# ── detect ──────────────────────────────────────────────────────────


@cli.command()
@_path_option
@_json_option
def detect(project_path: str | None, as_json: bool) -> None:
    """Show which mode a project directory runs in."""
    from wpnow.core.use_cases.detect import run_detect

    result = run_detect(Path(project_path) if project_path else None)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.mode is not None
    icon = _MODE_ICONS.get(result.mode, "•")
    click.secho(f"{icon} {result.mode}", fg="cyan", bold=True)
    click.echo(f"   {result.project_path}")
    for name, matched in result.checks.items():
        marker = click.style("✓", fg="green") if matched else click.style("✗", fg="bright_black")
        click.echo(f"     {marker} {name}")


# ── releases ────────────────────────────────────────────────────────


@cli.command()
@_json_option
def releases(as_json: bool) -> None:
    """List the WordPress releases wp-now can install."""
    from wpnow.core.models.options import DEFAULT_WORDPRESS_VERSION
    from wpnow.core.models.release import list_releases

    items = list_releases()

    if as_json:
        click.echo(json.dumps([r.model_dump(mode="json") for r in items], indent=2))
        return

    click.secho("📦 WordPress releases", fg="cyan", bold=True)
    for release in items:
        default = " (default)" if release.identifier == DEFAULT_WORDPRESS_VERSION else ""
        size_mb = release.expected_size / 1_000_000
        click.echo(f"   • {release.identifier:<8} ~{size_mb:5.1f} MB  {release.url}{default}")


# ── config ──────────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("show")
@_path_option
@_json_option
@click.pass_context
def config_show(ctx: click.Context, project_path: str | None, as_json: bool) -> None:
    """Show resolved options without downloading or mounting anything."""
    from wpnow.core.use_cases.config_show import show_config

    result = show_config(
        cli_overrides={"project_path": project_path},
        config_path=ctx.obj.get("config_path"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    opts = result.options
    assert opts is not None
    source = str(result.config_path) if result.config_path else "(no wp-now.yml)"
    click.secho(f"⚙️  {source}", fg="cyan", bold=True)
    for key, value in opts.to_dict().items():
        click.echo(f"   {key:<18} {value}")
    click.echo(f"   {'home':<18} {result.home}")
    click.echo(f"   {'runtime':<18} {result.runtime or '(not set)'}")


if __name__ == "__main__":
    cli()
