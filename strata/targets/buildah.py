import asyncio
import copy
import hashlib
import os
import shlex
import sys
from pathlib import Path

from .base import Target

from ..image import Image


class Buildah(Target):
    """
    Build container image with buildah.

    Each action runs in the working container and is committed as a layer,
    tagged after a hash of the previous layer and the action cache key.
    Layers found on the host are reused instead of running their action
    again, layers of a previous run that don't match anymore are dropped.

    The image is committed and tagged only when all actions succeeded, the
    working container is removed in any case.
    """

    ENV_TAGS = (
        # gitlab
        'CI_COMMIT_SHORT_SHA',
        'CI_COMMIT_REF_NAME',
        'CI_COMMIT_TAG',
        # CircleCI
        'CIRCLE_SHA1',
        'CIRCLE_TAG',
        'CIRCLE_BRANCH',
        # contributions welcome here
    )

    def __init__(self, *actions, base=None, commit=None, push=False,
                 parent=None, output=None):
        self.base = base or 'alpine'
        self.image = Image(commit) if commit else None
        self.push = push
        self.ctr = None

        super().__init__(*actions, output=output)

        self.parent = parent or Target(output=self.output)

    def is_runnable(self):
        return os.getuid() == 0

    def __str__(self):
        if not self.is_runnable():
            return 'Replacing with: buildah unshare ' + ' '.join(sys.argv)
        return f'Buildah({self.image})'

    async def __call__(self, *actions):
        if actions:
            return await super().__call__(*actions)

        if not self.is_runnable():
            os.execvp('buildah', ['buildah', 'unshare'] + sys.argv)
            return  # process has been replaced

        actions = self.actions
        if self.image:
            await self.image.layers.ls(self)
            keep = await self.cache_setup(self.image.layers, *actions)
            keepnames = [*map(lambda x: 'localhost/' + str(x), keep)]
            self.invalidate = [
                name for name in self.image.layers if name not in keepnames
            ]
            if self.invalidate:
                self.output.info('Invalidating old layers')
                await self.image.layers.rm(self, self.invalidate)
            actions = actions[len(keep):]

        self.ctr = (await self.parent.exec('buildah', 'from', self.base)).out
        stopped = True
        try:
            self.root = Path(
                (await self.parent.exec('buildah', 'mount', self.ctr)).out
            )
            stopped = await self.run(*actions)
        finally:
            await self.teardown(stopped)
        return stopped

    async def cache_setup(self, layers, *actions):
        keep = []
        self.image_previous = Image(self.base)
        for action in actions:
            action_image = await self.action_image(action)
            name = 'localhost/' + str(action_image)
            if name in layers:
                self.base = name
                self.image_previous = action_image
                keep.append(action_image)
                self.results.new(self, action).status = 'cached'
                self.output.skip(
                    f'Found layer for {action}: {action_image.tags[0]}'
                )
            else:
                break
        return keep

    async def action_image(self, action):
        prefix = str(self.image_previous)
        for tag in self.image_previous.tags:
            if tag.startswith('layer-'):
                prefix = tag
                break
        if hasattr(action, 'cachekey'):
            action_key = action.cachekey()
            if asyncio.iscoroutine(action_key):
                action_key = await action_key
            action_key = str(action_key)
        else:
            action_key = str(action)
        key = prefix + action_key
        sha1 = hashlib.sha1(key.encode('utf8'))
        action_image = copy.deepcopy(self.image)
        action_image.tags = ['layer-' + sha1.hexdigest()]
        return action_image

    async def action(self, action, reraise=False):
        stop = await super().action(action, reraise)
        if not stop and not reraise and self.image:
            action_image = await self.action_image(action)
            self.output.info(f'Commiting {action_image} for {action}')
            await self.parent.exec(
                'buildah',
                'commit',
                '--format=' + action_image.format,
                self.ctr,
                action_image,
            )
            self.image_previous = action_image
        return stop

    async def teardown(self, stopped):
        try:
            await self.parent.exec('buildah', 'umount', self.ctr)
            if not stopped and self.image:
                await self.commit()
                if self.push:
                    await self.image.push(self)
        finally:
            await self.parent.exec('buildah', 'rm', self.ctr)

    async def exec(self, *args, user=None, **kwargs):
        _args = ['buildah', 'run']
        if user:
            _args += ['--user', user]
        _args += [self.ctr, '--', 'sh', '-euc']
        if len(args) == 1:
            _args.append(str(args[0]))
        else:
            _args.append(shlex.join([str(a) for a in args]))
        return await self.parent.exec(*_args, **kwargs)

    async def config(self, **config):
        for key, value in config.items():
            await self.parent.exec(
                'buildah', 'config', f'--{key}', value, self.ctr)

    async def commit(self):
        await self.parent.exec(
            'buildah',
            'commit',
            f'--format={self.image.format}',
            self.ctr,
            f'{self.image.repository}:final',
        )
        if self.image.backend == 'docker':
            await self.parent.exec(
                'buildah',
                'push',
                f'{self.image.repository}:final',
                f'docker-daemon:{self.image.repository}:latest'
            )

        # figure tags from CI vars
        for name in self.ENV_TAGS:
            value = os.getenv(name)
            if value and value not in self.image.tags:
                self.image.tags.append(value)

        tags = [f'{self.image.repository}:{tag}' for tag in self.image.tags]
        await self.parent.exec(
            'buildah', 'tag', self.image.repository + ':final', *tags)

    async def mkdir(self, *paths):
        return await self.parent.mkdir(*[self.path(path) for path in paths])

    async def copy(self, *args):
        return await self.parent.exec('buildah', 'copy', self.ctr, *args)
