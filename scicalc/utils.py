from scicalc.global_vars import MAX_MSG_LEN


def get_as_number(string):
    try:
        return int(string)
    except ValueError:
        try:
            return float(string)
        except ValueError:
            return False

def get_flags(args, join=False, make_dic=False, no_args=None):
    if args is None:
        return [], []

    arg_list = args.split()
    flags = []
    not_flags = []
    flag_dic = {}
    no_args = [] if no_args is None else no_args

    while arg_list:
        arg = arg_list.pop(0)
        # A leading '-' followed by a digit is a negative number, not a flag
        if arg[0] == '-' and len(arg) > 1 and not arg[1].isdigit():
            if len(arg) == 2 and make_dic:
                flag_dic[arg[1]] = None if arg[1] in no_args or not arg_list else arg_list.pop(0)
            else:
                flags.extend([i.lower() for i in arg[1:]])
        else:
            not_flags.append(arg)

    if join:
        not_flags = ' '.join(not_flags)

    if make_dic:
        return flag_dic, not_flags

    return flags, not_flags

# Sends a message, splitting it on line breaks when it exceeds Discord's length limit
async def package_message(obj, ctx):
    if isinstance(obj, (int, float)):
        obj = str(obj)
    elif isinstance(obj, (list, set, tuple)):
        obj = '\n'.join([str(i) for i in obj])

    if len(obj) <= MAX_MSG_LEN:
        await ctx.send(obj)

        return

    i = 0
    while i < len(obj):
        end_index = len(obj) - i

        if end_index > MAX_MSG_LEN:
            end_index = obj[i:i + MAX_MSG_LEN].rfind('\n')
            end_index = MAX_MSG_LEN if end_index <= 0 else end_index

        await ctx.send(obj[i:i + end_index])
        i += end_index + (1 if obj[i + end_index:i + end_index + 1] == '\n' else 0)
