import shlex

from .run import instruction


class Configure:
    """
    Persist package manager settings into the snapshot.

    Lines are appended to the package manager configuration files unless
    already present, which makes the step idempotent.
    """

    def __init__(self, config):
        self.config = config

    def commands(self):
        cmds = []
        for path, line in self.config.settings():
            path, line = shlex.quote(path), shlex.quote(line)
            cmds.append(f'grep -qxF {line} {path} || echo {line} >> {path}')
        return cmds

    async def __call__(self, target):
        for cmd in self.commands():
            await target.rexec(cmd)

    def containerfile(self):
        cmds = self.commands()
        return [instruction(*cmds)] if cmds else []

    def __str__(self):
        return f'Configure({self.config})'
