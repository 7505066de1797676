"""
ANSI color codes used by console output.

Each color is available in three spellings: ``colors.cyan``,
``colors.bcyan`` and ``colors.cyanbold`` for the bold variant.
"""

codes = dict(
    cyan=51,
    blue=33,
    green=46,
    green2=118,
    purple=135,
    red=196,
    yellow=226,
    orange=208,
    gray=250,
    pink=213,
    pink1=218,
)


class Colors:
    def __init__(self, **codes):
        for name, code in codes.items():
            setattr(self, name, f'\u001b[38;5;{code}m')
            setattr(self, 'b' + name, f'\u001b[1;38;5;{code}m')
            setattr(self, name + 'bold', f'\u001b[1;38;5;{code}m')
        self.reset = '\u001b[0m'

    def __getitem__(self, name):
        return getattr(self, name)


colors = Colors(**codes)
