#!/usr/bin/env python3
"""
Munin entry points for munin_probes.

Each plugin is symlinked into /etc/munin/plugins; munin-node runs it with an
optional first argument choosing the mode.

http_load (link name http_load_<url_id>_<category>):
  autoconf        "yes" if any URL is configured, else "no" (exit 1)
  suggest         List <url_id>_<category> for every URL and category
  cron [verbose]  Fetch every URL and its resources, update the caches
  config          Graph metadata for the linked instance
  (none)          Current values for the linked instance

ftp_logins:
  autoconf        "yes" if the FTP log is readable
  config          Graph metadata
  (none)          Login counters

Common options:
  --config PATH   YAML/JSON settings file (munin env.* settings take precedence)
  --name NAME     Plugin name to decode (default: basename of argv[0])

Example crontab line:
  */5 * * * * munin munin-http-load cron
"""
import sys
from pathlib import Path
from typing import Optional

import click

from munin_probes import __version__
from munin_probes.cache import FileCacheStore
from munin_probes.config import load_ftp_config, load_http_config
from munin_probes.crawler.models import Category, Instance
from munin_probes.engine import Engine
from munin_probes.logger import enable_verbose, init_logging
from munin_probes.registry import load_registry
from munin_probes.report.munin import render_config, render_values
from munin_probes import ftp_logins as ftp

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _echo_lines(lines):
    for line in lines:
        click.echo(line)


def _default_name() -> str:
    return Path(sys.argv[0]).name


config_option = click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='YAML/JSON settings file.'
)


@click.command('http_load', context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='munin_probes, version %(version)s')
@config_option
@click.option(
    '--name', '-n', 'plugin_name',
    default=None,
    help='Plugin name encoding <url_id>_<category> (default: basename of argv[0])'
)
@click.argument('mode', required=False, default='')
@click.argument('flags', nargs=-1)
def http_load(config_path: Optional[Path], plugin_name: Optional[str], mode: str, flags):
    """Web page size, load time and composition, per monitored URL."""
    init_logging()
    try:
        cfg = load_http_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')

    if mode == 'autoconf':
        if load_registry(cfg.url_file):
            click.echo('yes')
        else:
            click.echo('no')
            sys.exit(1)
        return

    if mode == 'suggest':
        for url_id in load_registry(cfg.url_file):
            for category in Category:
                click.echo(f'{url_id}_{category}')
        return

    if mode == 'cron':
        if 'verbose' in flags:
            enable_verbose()
        Engine(cfg).run_cycle()
        return

    instance = Instance.from_plugin_name(plugin_name or _default_name(), cfg.instance_prefix)
    if instance is None:
        return
    url = load_registry(cfg.url_file).get(instance.url_id)
    if url is None:
        return
    cache = FileCacheStore(cfg.cache_dir, cfg.instance_prefix).read(instance)

    if mode == 'config':
        _echo_lines(render_config(instance, url, cache, cfg.graph_category))
    else:
        _echo_lines(render_values(instance, cache))


@click.command('ftp_logins', context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='munin_probes, version %(version)s')
@config_option
@click.argument('mode', required=False, default='')
def ftp_logins(config_path: Optional[Path], mode: str):
    """Successful and failed FTP logins found in the server log."""
    init_logging()
    try:
        cfg = load_ftp_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')

    if mode == 'autoconf':
        click.echo(ftp.autoconf(cfg))
    elif mode == 'config':
        _echo_lines(ftp.render_config(cfg))
    else:
        _echo_lines(ftp.render_values(cfg))


if __name__ == "__main__":
    http_load()
