"""CLI interface for Tally"""
import logging

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from core.assistant import Assistant, ASSISTANT_NAME
from core.exceptions import StorageFailure
from core.storage import TaskStorage
from utils.logging_config import setup_logging, get_logger

console = Console()
logger = get_logger('cli')


def _show(reply: str):
    """Print a reply in a panel; Text keeps '[T] [ ]' from being read as markup"""
    console.print(Panel(Text(reply), title=ASSISTANT_NAME, title_align="left", border_style="cyan"))


def _open_assistant(ctx) -> Assistant:
    """Load the task file, or report why it cannot be read and exit"""
    try:
        return Assistant(ctx.obj['storage'])
    except StorageFailure as e:
        logger.error(f"Could not start: {e}")
        _show(str(e))
        ctx.exit(1)


@click.group(invoke_without_command=True)
@click.option('--data-file', type=click.Path(dir_okay=False), default=None,
              help='Task file to use instead of the configured one')
@click.option('--verbose', is_flag=True, help='Log to the console at DEBUG level')
@click.pass_context
def cli(ctx, data_file, verbose):
    """Tally - a chatty task tracker for to-dos, deadlines and events"""
    if verbose:
        setup_logging(console_output=True, level=logging.DEBUG)
    else:
        setup_logging()

    ctx.obj = {'storage': TaskStorage(data_file) if data_file else TaskStorage()}
    logger.debug(f"Using task file {ctx.obj['storage'].file_path}")

    if ctx.invoked_subcommand is None:
        ctx.invoke(chat)


@cli.command()
@click.pass_context
def chat(ctx):
    """Start an interactive chat session"""
    assistant = _open_assistant(ctx)
    _show(assistant.greet())

    while not assistant.is_exit:
        try:
            line = Prompt.ask("[bold green]You[/bold green]", console=console)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line.strip():
            continue
        _show(assistant.respond(line))


@cli.command()
@click.argument('words', nargs=-1, required=True)
@click.pass_context
def send(ctx, words):
    """Run one command, e.g.: send todo buy milk"""
    assistant = _open_assistant(ctx)
    _show(assistant.respond(" ".join(words)))

