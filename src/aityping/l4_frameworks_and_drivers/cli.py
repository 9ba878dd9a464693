"""CLI entry point for aityping."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from aityping import __version__


def _container(ctx: click.Context):
    from aityping.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: not loaded on --help
        DependencyContainer,
    )

    config_path = ctx.obj.get('config_path')
    return DependencyContainer(config_path=Path(config_path) if config_path else None)


def _fail(message: str) -> None:
    click.echo(f'Error: {message}', err=True)
    sys.exit(1)


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to the YAML config file (default: user config directory).',
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path):
    """aityping -- record translation hotkeys and manage the shared configuration."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command()
@click.pass_context
def show(ctx):
    """Print the current hotkeys and languages."""
    from aityping.l1_entities.hotkey import format_hotkey  # noqa: PLC0415 -- deferred: not loaded on --help

    container = _container(ctx)
    config = asyncio.run(container.store.load())
    click.echo(f'Selected text : {format_hotkey(config.hotkey.selected_mode)}')
    click.echo(f'Full text     : {format_hotkey(config.hotkey.full_mode)}')
    click.echo(f'Target        : {config.language.current_target}')
    for lang in config.language.favorite_languages:
        marker = '*' if lang.code == config.language.current_target else ' '
        click.echo(f'  {marker} {lang.code:<8} {lang.name}')


@cli.command()
@click.pass_context
def settings(ctx):
    """Open the interactive hotkey recorder."""
    from aityping.l3_interface_adapters.gateways.paths import (  # noqa: PLC0415 -- deferred: not loaded on --help
        LOG_DIR,
    )
    from aityping.l4_frameworks_and_drivers.apps.settings import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded on --help
        SettingsApp,
    )

    container = _container(ctx)
    SettingsApp(controller=container.controller, log_dir=LOG_DIR).run()


@cli.command('set-count')
@click.argument('count', type=int)
@click.pass_context
def set_count(ctx, count):
    """Set how many presses trigger the full-text hotkey."""
    from aityping.l1_entities.errors import HotkeyValidationError  # noqa: PLC0415 -- deferred: not loaded on --help

    controller = _container(ctx).controller

    async def run():
        await controller.load()
        controller.set_full_repeat_count(count)
        return await controller.save()

    try:
        result = asyncio.run(run())
    except HotkeyValidationError as e:
        _fail(str(e))
        return
    if not result.ok:
        _fail(result.error)
    click.echo(f'Full-text hotkey now needs {count} presses.')


@cli.group()
def language():
    """Manage favorite languages and the translation target."""


def _edit_language(ctx: click.Context, edit) -> None:
    from aityping.l1_entities.errors import LanguageConfigError  # noqa: PLC0415 -- deferred: not loaded on --help

    store = _container(ctx).store

    async def run():
        config = await store.load()
        updated = config.model_copy(update={'language': edit(config.language)})
        return await store.save(updated)

    try:
        result = asyncio.run(run())
    except LanguageConfigError as e:
        _fail(str(e))
        return
    if not result.ok:
        _fail(result.error)
    click.echo(f'Target language: {store.config.language.current_target}')


@language.command('use')
@click.argument('code')
@click.pass_context
def language_use(ctx, code):
    """Translate into CODE from now on."""
    from aityping.l1_entities.errors import LanguageConfigError  # noqa: PLC0415 -- deferred: not loaded on --help

    store = _container(ctx).store

    async def run():
        await store.load()
        return await store.switch_language(code)

    try:
        result = asyncio.run(run())
    except LanguageConfigError as e:
        _fail(str(e))
        return
    if not result.ok:
        _fail(result.error)
    click.echo(f'Target language: {code}')


@language.command('add')
@click.argument('code')
@click.argument('name')
@click.pass_context
def language_add(ctx, code, name):
    """Add CODE (displayed as NAME) to the favorites."""
    from aityping.l1_entities.config import Language  # noqa: PLC0415 -- deferred: not loaded on --help

    _edit_language(ctx, lambda lang: lang.with_favorite_added(Language(code=code, name=name)))


@language.command('remove')
@click.argument('code')
@click.pass_context
def language_remove(ctx, code):
    """Remove CODE from the favorites."""
    _edit_language(ctx, lambda lang: lang.with_favorite_removed(code))
