# Cog that holds the calculator commands and each channel's expression history

from collections import deque
from dataclasses import dataclass
from discord.ext.commands import Bot, Cog, errors, hybrid_command

from scicalc.calculator import calculate, insert_function
from scicalc.errors import CalculatorError
from scicalc.global_vars import DEFAULT_HISTORY_COUNT, HISTORY_LIMIT
from scicalc.tokens import CONSTANTS, FUNCTIONS
from scicalc.utils import get_as_number, get_flags, package_message


@dataclass
class HistoryEntry:
    expression: str
    result: str
    ok: bool

    def __str__(self):
        return f"`{self.expression}` = {self.result}" if self.ok else f"`{self.expression}` -> {self.result}"


class Calculator(Cog):

    # attr bot - our client
    # attr channel_history - channel id mapped to a deque of HistoryEntry, newest last
    def __init__(self, bot: Bot, history_limit=HISTORY_LIMIT):
        self.bot = bot
        self.history_limit = history_limit
        self.channel_history = {}

    # Evaluates an expression and records it in the channel's history
    # Returns the text to display: either the result or the error message
    def evaluate(self, channel_id, expression):
        try:
            entry = HistoryEntry(expression, calculate(expression), True)
        except CalculatorError as error:
            entry = HistoryEntry(expression, str(error), False)

        self.channel_history.setdefault(channel_id, deque(maxlen=self.history_limit)).append(entry)

        return entry.result

    # Returns up to count entries, most recent first
    def get_history(self, channel_id, count=DEFAULT_HISTORY_COUNT):
        return list(reversed(self.channel_history.get(channel_id, ())))[:count]

    # $calc command used for calculating the result of mathematical expressions
    # param expression - all user input following the command name
    @hybrid_command(help="Returns the result of a mathematical expression.\n"
                         "Example: `$calc 6 * 7`\n"
                         "This function supports addition `+`, subtraction `-`, multiplication `*`, division `/` or `÷`, "
                         "modulation `%`, exponentiation `^`, factorials `!`, and parenthesis `()`.\n"
                         f"Additionally the constants `{'`, `'.join(CONSTANTS)}`, and the following functions are supported: "
                         f"`{'`, `'.join(FUNCTIONS)}`\n"
                         "Example: `$calc 9sin(90)`\n\n"
                         "**Note**: Trig functions take their input in degrees and inverse trig functions return degrees.",
                    brief="Calculates the result of a mathematical expression")
    async def calc(self, ctx, *, expression: str):
        await ctx.send(self.evaluate(ctx.channel.id, expression))

    @calc.error
    async def calc_error(self, ctx, error):
        if isinstance(error, errors.MissingRequiredArgument):
            await ctx.send("You must include an expression with this command.\n"
                           "Example: `$calc 2^10`\n\n"
                           "Please use `$help calc` for more information.")
            error.handled = True

    @hybrid_command(help=f"Returns the last {DEFAULT_HISTORY_COUNT} expressions calculated in this channel, "
                         f"most recent first.\n"
                         f"This command has the following flags:\n"
                         f"* **-c**: Specifies the number of entries to return\n"
                         f"\tExample: `$history -c 5`",
                    brief="Shows recent calculations")
    async def history(self, ctx, *, args: str = None):
        flags, _ = get_flags(args, make_dic=True)
        count = DEFAULT_HISTORY_COUNT

        if 'c' in flags:
            if not isinstance(count := get_as_number(flags["c"] or ""), int) or count < 1:
                return await ctx.send(f"Bad argument for `-c`: `{flags['c']}`. Use a positive integer.")

        if not (entries := self.get_history(ctx.channel.id, count)):
            return await ctx.send("No calculations yet! Try using `$calc` first.")

        await package_message([f"{i}. {entry}" for i, entry in enumerate(entries, 1)], ctx)

    @hybrid_command(help="Calculates an expression from this channel's history again.\n"
                         "Entries are numbered as shown by `$history`, 1 being the most recent.\n"
                         "Example: `$recall 2`",
                    brief="Repeats a previous calculation")
    async def recall(self, ctx, index: int = 1):
        entries = self.get_history(ctx.channel.id, self.history_limit)

        if not 1 <= index <= len(entries):
            return await ctx.send(f"No history entry #{index}. There are {len(entries)} entries in this channel.")

        expression = entries[index - 1].expression

        await ctx.send(f"`{expression}` = {self.evaluate(ctx.channel.id, expression)}")

    @recall.error
    async def recall_error(self, ctx, error):
        if isinstance(error, errors.BadArgument):
            await ctx.send("Bad argument, use only integers with this command.\n"
                           "Example: `$recall 3`")
            error.handled = True

    @hybrid_command(help="Appends a function call to an expression so it can be completed.\n"
                         f"Supported functions: `{'`, `'.join(FUNCTIONS)}`\n"
                         "Example: `$func sin 9` returns `9sin()`",
                    brief="Inserts a function into an expression")
    async def func(self, ctx, name: str, *, text: str = ""):
        if name not in FUNCTIONS:
            return await ctx.send(f"Unknown function `{name}`. Supported functions: `{'`, `'.join(FUNCTIONS)}`")

        await ctx.send(f"`{insert_function(text.replace(' ', ''), name)}`")

    @func.error
    async def func_error(self, ctx, error):
        if isinstance(error, errors.MissingRequiredArgument):
            await ctx.send("You must include a function name with this command.\n"
                           "Example: `$func √`\n\n"
                           "Please use `$help func` for more information.")
            error.handled = True

    @hybrid_command(help="Deletes this channel's calculation history", brief="Clears calculation history")
    async def clear(self, ctx):
        self.channel_history.pop(ctx.channel.id, None)
        await ctx.send("Calculation history cleared.")
