"""Main CLI entry points for create-ent-stack."""

import click

from create_ent_stack import __version__
from create_ent_stack.commands.bundle import prepack_cmd, set_version_cmd
from create_ent_stack.commands.create import create_cmd

# `create-ent-stack` takes no arguments: it is the scaffold command itself.
main = create_cmd


@click.group()
@click.version_option(version=__version__, prog_name="ent-stack-bundle")
def bundle():
    """ent-stack-bundle - Maintain the template shipped with create-ent-stack.

    \b
    Release workflow:
      ent-stack-bundle set-version 1.2.3    Pin the ENT Stack tag
      ent-stack-bundle prepack              Download and bundle it
    """
    pass


bundle.add_command(prepack_cmd, name="prepack")
bundle.add_command(set_version_cmd, name="set-version")


if __name__ == "__main__":
    main()
