from discord.ext.commands import Command, HelpCommand

from scicalc.global_vars import COMMAND_PREFIX
from scicalc.utils import package_message


class CustomHelpCommand(HelpCommand):
    def __init__(self):
        super().__init__()

    # Called when a user gives the $help command
    # param mapping - a mapping of cogs to commands
    async def send_bot_help(self, mapping):
        cog_list = {}

        for cog, commands in mapping.items():
            # Skip cogs that don't contain commands
            if not commands:
                continue

            cog_list[cog.qualified_name if cog else "Miscellaneous"] = commands

        command_list = [f"# {key}\n{get_command_list(val)}" for key, val in cog_list.items()]
        await package_message('\n'.join(command_list), self.get_destination())

    # Called when user gives the $help {cog_name} command
    # param cog - the cog that was requested for help
    async def send_cog_help(self, cog, return_text=False):
        response = f"# {cog.qualified_name}\n{get_command_list(cog.get_commands())}"

        if return_text:
            return response

        await self.get_destination().send(response)

    # Called when user gives the $help {command_name} command
    # param command - the command that was requested for help
    async def send_command_help(self, command):
        if command.hidden:
            return
        await self.get_destination().send(f"# {command.name}\n{command.help}")

    async def command_not_found(self, name):
        for cog in self.context.bot.cogs.values():
            if cog.qualified_name.lower() == name.lower():
                return await self.send_cog_help(cog, return_text=True)

        return f"No command called \"{name}\" found."


def get_command_list(commands):
    entries = sorted((i for i in commands if isinstance(i, Command) and not i.hidden), key=lambda x: x.name)

    return "* " + "\n* ".join([f"`{COMMAND_PREFIX}{i.name}` - {i.brief}" for i in entries])
