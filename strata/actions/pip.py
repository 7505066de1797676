import shlex

from ..exceptions import StrataException
from .run import instruction


class Pip:
    """
    Pip abstraction layer.

    Pip always runs as a module of the given interpreter, so that installing
    for python3.11 never touches the packages of the system python.
    """
    regexps = {
        r'^(Successfully installed)': '{green}\\1{reset}',
    }

    def __init__(self, *packages, python='python3', upgrade=False,
                 constraints=None):
        self.packages = packages
        self.python = python
        self.upgrade = upgrade
        self.constraints = constraints

    @property
    def reads(self):
        return [self.constraints] if self.constraints else []

    def commands(self):
        args = [self.python, '-m', 'pip', 'install', '--no-cache-dir']
        if self.upgrade:
            args.append('--upgrade')
        if self.constraints:
            args += ['--constraint', self.constraints]
        return [shlex.join(args + list(self.packages))]

    async def __call__(self, target):
        if not await target.which(self.python):
            raise StrataException(f'Could not find {self.python}')

        for cmd in self.commands():
            await target.rexec(cmd, regexps=self.regexps)

    def containerfile(self):
        return [instruction(*self.commands())]

    def __str__(self):
        return f'Pip({", ".join(self.packages)}, python={self.python})'
