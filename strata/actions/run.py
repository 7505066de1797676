def instruction(*cmds):
    """Render shell commands as a single Containerfile RUN instruction."""
    return 'RUN ' + ' \\\n    && '.join(cmds)


class Run:
    def __init__(self, cmd, root=False):
        self.cmd = cmd
        self.root = root

    def commands(self):
        return [self.cmd]

    async def __call__(self, target):
        if self.root:
            self.proc = await target.rexec(self.cmd)
        else:
            self.proc = await target.exec(self.cmd)

    def containerfile(self):
        return [instruction(*self.commands())]

    def __str__(self):
        return f'Run({self.cmd})'
