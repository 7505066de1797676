from pathlib import Path
import os
import re
import sys
import traceback

from ..exceptions import StrataException
from ..output import Output
from ..proc import Proc
from ..result import Result, Results


class Target:
    """
    Execute actions in order, stopping at the first failure.

    Actions are awaitables taking a ``target`` keyword argument. Actions may
    call the target with other actions, in which case failures of the nested
    actions propagate to the calling action. Actions may define a
    ``clean(target, result)`` coroutine, which is awaited after the action
    whatever its outcome.
    """

    def __init__(self, *actions, root=None, output=None):
        self.actions = actions
        self.results = Results()
        self.output = output or Output()
        self.parent = None
        self.root = root or os.getcwd()

    @property
    def parent(self):
        return self._parent or Target(output=self.output)

    @parent.setter
    def parent(self, value):
        self._parent = value

    @property
    def failed(self):
        return self.results.failed

    async def __call__(self, *actions):
        if actions:
            # nested call from an action: re-raise
            for action in actions:
                await self.action(action, reraise=True)
        else:
            return await self.run(*self.actions)

    async def run(self, *actions):
        """Run actions, return True if one of them failed."""
        for action in actions:
            if await self.action(action):
                return True
        return False

    async def action(self, action, reraise=False):
        result = Result(self, action)
        self.output.start(action)
        try:
            await action(target=self)
        except Exception as e:
            self.output.fail(action, e)
            result.status = 'failure'
            result.exception = e
            if reraise:
                raise
            elif isinstance(e, StrataException):
                # the failed command was already printed
                self.output.error(e)
            else:
                traceback.print_exception(type(e), e, sys.exc_info()[2])
            return True
        else:
            self.output.success(action)
            result.status = 'success'
        finally:
            self.results.append(result)

            clean = getattr(action, 'clean', None)
            if clean:
                self.output.clean(action)
                await clean(self, result)

    async def rexec(self, *args, **kwargs):
        kwargs['user'] = 'root'
        return await self.exec(*args, **kwargs)

    async def which(self, *cmd):
        """
        Return the commands found among cmd, in the target's PATH.
        """
        proc = await self.exec('type ' + ' '.join(cmd), raises=False)
        result = []
        for res in proc.out.split('\n'):
            match = re.match('([^ ]+) is ([^ ]+)$', res.strip())
            if match:
                result.append(match.group(1))
        return result

    async def exists(self, path):
        proc = await self.exec('test', '-e', path, raises=False)
        return proc.rc == 0

    def shargs(self, *args, **kwargs):
        user = kwargs.pop('user', None)
        args = [str(arg) for arg in args if arg is not None]

        if args and ' ' in args[0]:
            if len(args) == 1:
                args = ['sh', '-euc', args[0]]
            else:
                args = ['sh', '-euc'] + list(args)

        if user == 'root':
            if os.getuid() != 0:
                args = ['sudo'] + args
        elif user:
            args = ['sudo', '-u', user] + args

        return args, kwargs

    async def exec(self, *args, **kwargs):
        kwargs.setdefault('quiet', not self.output.verbose('out'))
        args, kwargs = self.shargs(*args, **kwargs)
        return await Proc(*args, **kwargs).wait()

    async def config(self, **config):
        raise StrataException(
            f'{type(self).__name__} cannot configure an image')

    @property
    def root(self):
        return self._root

    @root.setter
    def root(self, value):
        self._root = Path(value or os.getcwd())

    def path(self, path):
        if str(path).startswith('/'):
            path = str(path)[1:]
        return self.root / path

    async def mkdir(self, *paths):
        if '_mkdir' not in self.__dict__:
            self._mkdir = []
        paths = [str(path) for path in paths if str(path) not in self._mkdir]
        if paths:
            await self.exec('mkdir', '-p', *paths)
            self._mkdir += paths

    async def copy(self, *args):
        return await self.exec('cp', '-a', *args)
