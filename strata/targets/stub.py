import re

from ..exceptions import WrongResult
from ..output import Output
from ..proc import Proc

from .base import Target


class ProcStub(Proc):
    def __init__(self, *args, rc=0, out='', **kwargs):
        super().__init__(*args, **kwargs)
        self.rc = rc
        self.out_raw = bytearray(out.encode('utf8'))

    async def start(self):
        self.started = True

    async def wait(self):
        self.started = self.waited = True
        if self.raises and self.rc:
            raise WrongResult(self)
        return self


class Stub(Target):
    """
    Target recording commands instead of executing them.

    Responses map regexps to ``(rc, out)`` tuples, the first regexp found in a
    command line decides of the result, other commands succeed silently.
    Commands looked up with ``type`` are found unless a response says
    otherwise.
    """

    def __init__(self, *actions, responses=None, **kwargs):
        kwargs.setdefault('output', Output(debug=False))
        super().__init__(*actions, **kwargs)
        self.responses = responses or {}
        self.calls = []
        self.image_config = {}

    async def exec(self, *args, user=None, **kwargs):
        cmd = ' '.join([str(arg) for arg in args])
        self.calls.append(cmd)

        rc, out = 0, ''
        if cmd.startswith('type '):
            out = '\n'.join(
                f'{name} is /usr/bin/{name}' for name in cmd.split(' ')[1:]
            )
        for pattern, response in self.responses.items():
            if re.search(pattern, cmd):
                rc, out = response
                break

        return await ProcStub(*args, rc=rc, out=out, **kwargs).wait()

    async def config(self, **config):
        for key, value in config.items():
            self.calls.append(f'config --{key} {value}')
        self.image_config.update(config)
