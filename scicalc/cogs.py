# Common collection space for all of the bots cogs
# This file imports the cogs from each file and adds them to the bot

# Local dependencies
from scicalc.Cogs.Calculator import Calculator

# Adds each cogs to the bot, this is called once the bot is ready for the first time
# param bot - commands.Bot object containing our client
async def add_cogs(bot):
    await bot.add_cog(Calculator(bot))
