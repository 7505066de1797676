"""
Asynchronous process execution wrapper.
"""

import asyncio
import json
import os
import re
import shlex
import sys

from .colors import colors
from .exceptions import WrongResult


class ProcProtocol(asyncio.subprocess.SubprocessStreamProtocol):
    """
    Internal subprocess stream protocol to capture and echo output.
    """

    def __init__(self, proc, *args, **kwargs):
        self.proc = proc
        super().__init__(*args, **kwargs)

    def receive(self, data, raw, target):
        raw.extend(data)
        if not self.proc.quiet:
            for line in self.proc.lines(data):
                target.buffer.write(line)
            target.flush()

    def pipe_data_received(self, fd, data):
        if fd == 1:
            self.receive(data, self.proc.out_raw, self.proc.stdout)
        elif fd == 2:
            self.receive(data, self.proc.err_raw, self.proc.stderr)


class Proc:
    """
    Subprocess wrapper.

    Example usage::

        proc = await Proc('find', '/').wait()

        print(proc.out)  # stdout
        print(proc.err)  # stderr
        print(proc.rc)   # return code

    A single argument containing spaces is split with shlex. With
    raises=True, which is the default, a non-zero return code raises
    WrongResult.
    """
    colors = colors

    def __init__(
        self,
        *args,
        quiet=None,
        regexps=None,
        raises=True,
        stdout=None,
        stderr=None,
    ):
        self.args = [str(arg) for arg in args]
        self.quiet = quiet if quiet is not None else False
        self.raises = raises
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.started = False
        self.waited = False
        self.rc = None
        self.out_raw = bytearray()
        self.err_raw = bytearray()

        self.regexps = dict()
        if regexps:
            for search, replace in regexps.items():
                if isinstance(search, str):
                    search = search.encode()
                search = re.compile(search)
                replace = replace.format(**self.colors.__dict__).encode()
                self.regexps[search] = replace

    def split(self):
        if len(self.args) == 1 and not os.path.exists(self.args[0]):
            return shlex.split(self.args[0])
        return self.args

    @property
    def cmd(self):
        return shlex.join(self.split())

    async def start(self):
        args = self.split()

        if not self.quiet:
            message = b''.join([
                self.colors.bgray.encode(),
                b'+ ',
                shlex.join(args).replace('\n', '\\n').encode(),
                self.colors.reset.encode(),
            ])
            for line in self.lines(message, highlight=False):
                self.stdout.buffer.write(line)
            self.stdout.flush()

        # This is what asyncio.create_subprocess_exec does, except we inject
        # our own SubprocessStreamProtocol subclass
        loop = asyncio.get_running_loop()

        self.transport, self.protocol = await loop.subprocess_exec(
            lambda: ProcProtocol(
                self,
                limit=asyncio.subprocess.streams._DEFAULT_LIMIT,
                loop=loop,
            ),
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        self.proc = asyncio.subprocess.Process(
            self.transport, self.protocol, loop)
        self.started = True

    async def wait(self):
        if not self.started:
            await self.start()

        if not self.waited:
            await self.proc.communicate()
            self.rc = self.transport.get_returncode()
            self.waited = True

        if self.raises and self.rc:
            raise WrongResult(self)

        return self

    @property
    def out(self):
        return self.out_raw.decode().strip()

    @property
    def err(self):
        return self.err_raw.decode().strip()

    @property
    def json(self):
        return json.loads(self.out)

    def lines(self, data, highlight=True):
        for line in data.strip().split(b'\n'):
            if highlight:
                line = self.highlight(line)
            yield line + b'\n'

    def highlight(self, line):
        if b'\x1b[' in line or b'\033[' in line or b'\\e[' in line:
            return line

        for search, replace in self.regexps.items():
            line = re.sub(search, replace, line)
        line = line + self.colors.reset.encode()

        return line

