import shlex

from .run import instruction


class Discard:
    """Remove build-time files from the snapshot once consumed."""

    def __init__(self, *paths):
        self.discards = paths

    def commands(self):
        return ['rm -rf ' + shlex.join(self.discards)]

    async def __call__(self, target):
        for cmd in self.commands():
            await target.rexec(cmd)

    def containerfile(self):
        return [instruction(*self.commands())]

    def __str__(self):
        return f'Discard({", ".join(self.discards)})'
