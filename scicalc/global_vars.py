# Values read from the environment (.env is loaded by bot.py before this module is imported)

from os import getenv

COMMAND_PREFIX = getenv("CALC_PREFIX", "$")
HISTORY_LIMIT = int(getenv("CALC_HISTORY_LIMIT", "50"))
DEFAULT_HISTORY_COUNT = 10

MAX_MSG_LEN = 2000
