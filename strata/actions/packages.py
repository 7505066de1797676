from textwrap import dedent

from .run import instruction


class Packages:
    """
    Package manager abstract layer.

    Packages are installed with the commands of the PackageConfig given as
    ``config``. Once they are, the caches, history and logs the package
    manager left behind are removed, so they never land in a snapshot. This
    cleanup is safe to run when nothing was cached.
    """
    verb = 'install'
    regexps = {
        r'(Installing|Upgrading|Removing|Erasing)': '{cyan}\\1{reset}',
        r'^(Complete!)$': '{green}\\1',
    }

    def __init__(self, *packages, config):
        self.config = config
        self.packages = []
        for package in packages:
            line = dedent(package).strip().replace('\n', ' ')
            self.packages += [p for p in line.split(' ') if p]

    def commands(self):
        return getattr(self.config, self.verb)(*self.packages)

    async def __call__(self, target):
        for cmd in self.commands():
            await target.rexec(cmd, regexps=self.regexps)

    async def clean(self, target, result):
        if result.status != 'success':
            return
        for cmd in self.config.clean():
            await target.rexec(cmd)

    def containerfile(self):
        return [instruction(*self.commands(), *self.config.clean())]

    def cachekey(self):
        return f'{self} {self.config}'

    def __str__(self):
        return f'{type(self).__name__}({", ".join(self.packages)})'


class Remove(Packages):
    """Remove packages, then clean up like Packages."""
    verb = 'remove'
