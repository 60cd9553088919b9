"""Command-line interface for running schema migrations."""

import rich_click as click

from .. import __version__
from ..config import settings
from ..core import configure_logging
from .apply import apply_command

# Configure rich-click styling
click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.STYLE_OPTION = "bold cyan"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_COMMAND = "bold green"
click.rich_click.STYLE_SWITCH = "bold blue"


@click.group(name="gcms-migrate")
@click.version_option(version=__version__, prog_name="gcms-migrate")
def main() -> None:
    """🧱 **gcms-migrate** - Declarative schema migrations for a headless CMS.

    Describe models, fields and enumerations in a YAML plan, preview the
    resulting batch and submit it to the management API.
    """
    configure_logging(
        environment=settings.environment,
        log_level=settings.log_level,
        json_logs=settings.json_logs,
    )


main.add_command(apply_command)


if __name__ == "__main__":
    main()


__all__ = ["main"]
