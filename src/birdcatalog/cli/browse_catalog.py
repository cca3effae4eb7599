"""CLI for browsing the bird catalog and fetching its images."""

import asyncio
from pathlib import Path

import click
from dependency_injector import providers

from birdcatalog.browser import CatalogBrowser
from birdcatalog.catalog.models import Group, Species
from birdcatalog.config import CatalogConfig, ConfigManager
from birdcatalog.core.container import Container
from birdcatalog.images.fetch_cache import ImageBytes, ImageFetchError
from birdcatalog.utils.structlog_configurator import configure_structlog


def build_container(config_path: Path | None, data_dir: Path | None) -> Container:
    """Create the application container with command line overrides applied."""
    container = Container()
    config = ConfigManager(container.path_resolver(), config_path=config_path).load()
    if data_dir is not None:
        config = config.model_copy(update={"data_dir": str(data_dir)})
    container.config.override(providers.Object(config))
    return container


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="BIRDCATALOG_CONFIG",
    help="Configuration file (default: ~/.birdcatalog/birdcatalog.yaml)",
)
@click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory with catalog JSON files (default: bundled data)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, data_dir: Path | None) -> None:
    """Browse bird groups, species and their photographs."""
    container = build_container(config_path, data_dir)
    configure_structlog(container.config())
    ctx.obj = container


def _browser(ctx: click.Context) -> CatalogBrowser:
    return ctx.obj.browser()


def _find_group(browser: CatalogBrowser, category: str) -> Group:
    group = browser.catalog.group_named(category)
    if group is None:
        raise click.BadParameter(f"No group named '{category}'", param_hint="CATEGORY")
    return group


@cli.command()
@click.pass_context
def groups(ctx: click.Context) -> None:
    """List bird groups with their order, family and species count."""
    browser = _browser(ctx)
    for group in browser.list_groups():
        click.echo(click.style(group.category, bold=True))
        click.echo(f"  Order:  {group.order.name}")
        click.echo(f"  Family: {group.family.name}")
        click.echo(f"  Species: {len(browser.list_species(group))}")


@cli.command()
@click.argument("category")
@click.pass_context
def species(ctx: click.Context, category: str) -> None:
    """List the species of the group named CATEGORY."""
    browser = _browser(ctx)
    group = _find_group(browser, category)
    for bird in browser.list_species(group):
        line = f"{click.style(bird.name, bold=True)}  {bird.latin}"
        if bird.tag is not None:
            line += f"  [{bird.tag.label}]"
        click.echo(line)

        detail = browser.detail_for(bird)
        if detail is not None and detail.summary:
            click.echo(f"  {detail.summary}")


@cli.command()
@click.argument("name")
@click.option("--all", "show_all", is_flag=True, help="Show every image instead of a preview")
@click.pass_context
def images(ctx: click.Context, name: str, show_all: bool) -> None:
    """Print image URLs for the species or group called NAME."""
    browser = _browser(ctx)
    record: Species | Group | None = browser.catalog.species_named(name)
    if record is None:
        record = browser.catalog.group_named(name)
    if record is None:
        raise click.BadParameter(f"No species or group named '{name}'", param_hint="NAME")

    if isinstance(record, Group):
        urls = browser.group_images(record) if show_all else browser.preview_images(record)
    else:
        urls = browser.all_images(record) if show_all else browser.preview_images(record)

    if urls is None:
        click.echo(f"No images for {name}.")
        return
    for url in urls:
        click.echo(url)


@cli.command()
@click.argument("urls", nargs=-1, required=True)
@click.pass_context
def fetch(ctx: click.Context, urls: tuple[str, ...]) -> None:
    """Fetch images through the cache and report what was downloaded."""
    browser = _browser(ctx)
    results = asyncio.run(_fetch_all(browser, urls))

    failed = 0
    for url, result in zip(urls, results, strict=True):
        if isinstance(result, ImageFetchError):
            failed += 1
            click.echo(click.style(f"{url}: {result.message}", fg="red"))
        else:
            click.echo(
                f"{url}: {result.format} {result.width}x{result.height} ({len(result)} bytes)"
            )

    if failed:
        ctx.exit(1)


async def _fetch_all(
    browser: CatalogBrowser, urls: tuple[str, ...]
) -> list[ImageBytes | ImageFetchError]:
    """Fetch every URL concurrently, collecting fetch errors as results."""

    async def fetch_one(url: str) -> ImageBytes | ImageFetchError:
        try:
            return await browser.fetch_image(url)
        except ImageFetchError as e:
            return e

    try:
        return list(await asyncio.gather(*(fetch_one(url) for url in urls)))
    finally:
        await browser.aclose()


@cli.command("init-config")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
def init_config(ctx: click.Context, force: bool) -> None:
    """Write a configuration file containing the defaults."""
    manager = ConfigManager(ctx.obj.path_resolver(), config_path=ctx.parent.params["config_path"])
    if manager.config_path.exists() and not force:
        click.echo(f"Configuration already exists at {manager.config_path}")
        ctx.exit(1)
    manager.save(CatalogConfig())
    click.echo(f"Wrote default configuration to {manager.config_path}")


def main() -> None:
    """Entry point for the birdcatalog command."""
    cli()


if __name__ == "__main__":
    main()
