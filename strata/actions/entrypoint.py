import json


class Entrypoint:
    """
    Set the process the image executes by default.

    Example, exec the container command as child of dumb-init, which
    forwards signals to it and reaps zombies::

        Entrypoint('dumb-init', '--')
    """

    def __init__(self, *entrypoint, cmd=None):
        self.entrypoint = list(entrypoint)
        self.cmd = list(cmd) if cmd is not None else None

    def settings(self):
        settings = dict(entrypoint=json.dumps(self.entrypoint))
        if self.cmd is not None:
            settings['cmd'] = json.dumps(self.cmd)
        return settings

    async def __call__(self, target):
        await target.config(**self.settings())

    def containerfile(self):
        return [
            f'{key.upper()} {value}'
            for key, value in self.settings().items()
        ]

    def __str__(self):
        return f'Entrypoint({" ".join(self.entrypoint)})'
