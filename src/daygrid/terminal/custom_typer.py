# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core


class AliasedTyperGroup(typer.core.TyperGroup):
    """TyperGroup whose command names may carry comma-separated aliases"""

    _CMD_SPLIT_P = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        cmd_name = self._group_cmd_name(cmd_name)
        return super().get_command(ctx, cmd_name)

    def _group_cmd_name(self, default_name: str) -> str:
        """Find the full command name if default_name is an alias"""
        for cmd in self.commands.values():
            name = cmd.name
            if name and default_name in self._CMD_SPLIT_P.split(name):
                return name
        return default_name

    def add_command(self, cmd: click.Command, name: Optional[str] = None) -> None:
        if name is None:
            name = cmd.name

        # Already registered under its full aliased name
        existing_name = self._group_cmd_name(name or "")
        if existing_name in self.commands and existing_name != name:
            return

        super().add_command(cmd, name)


class OrderedTyperGroup(AliasedTyperGroup):
    """Top-level group listing commands in a fixed order rather than by registration"""

    desired_order = [
        "event, e",
        "view, v",
        "session, s",
        "calendar, cal",
        "config, c",
    ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        result = [name for name in self.desired_order if name in self.commands]
        for cmd_name in self.commands.keys():
            if cmd_name not in result:
                result.append(cmd_name)
        return result
