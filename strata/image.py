import os
import re

from .exceptions import ParameterError


class Layers(set):
    """Snapshot images committed for an image, one per pipeline step."""

    def __init__(self, image):
        super().__init__()
        self.image = image

    @property
    def prefix(self):
        return 'localhost/' + self.image.repository + ':layer-'

    async def ls(self, target):
        """Fetch layers from localhost"""
        proc = await target.parent.exec(
            'buildah', 'images', '--json',
            quiet=True,
        )

        for result in (proc.json if proc.out else None) or []:
            for name in result.get('names', None) or []:
                if name.startswith(self.prefix):
                    self.add(name)
        return self

    async def rm(self, target, tags=None):
        """Drop layers for this image"""
        if tags is None:
            tags = [layer for layer in await self.ls(target)]
        if tags:
            await target.parent.exec('buildah', 'rmi', *tags, raises=False)
        self.difference_update(tags)


class Image:
    PATTERN = re.compile(
        '^((?P<backend>[a-z-]*)://)?((?P<registry>[^/]*[.:][^/]*)/)?((?P<repository>[^:@]+))?(:(?P<tags>[^@]*))?(@(?P<digest>.*))?$'  # noqa
        , re.I
    )
    REPOSITORY = re.compile(
        r'^[a-z0-9]+([._-][a-z0-9]+)*(/[a-z0-9]+([._-][a-z0-9]+)*)*$'
    )
    DIGEST = re.compile(r'^[a-z0-9]+([+._-][a-z0-9]+)*:[a-f0-9]{32,}$')

    def __init__(self, arg=None, format=None, backend=None, registry=None,
                 repository=None, tags=None, digest=None):
        self.arg = arg
        self.format = format
        self.backend = backend
        self.registry = registry
        self.repository = repository
        self.tags = tags or []
        self.digest = digest
        self.layers = Layers(self)

        match = re.match(self.PATTERN, arg or '')
        if match:
            for k, v in match.groupdict().items():
                if getattr(self, k):
                    continue
                if not v:
                    continue
                if k == 'tags':
                    v = v.split(',')
                setattr(self, k, v)

        # docker.io currently has issues with oci format
        if self.registry == 'docker.io':
            self.backend = 'docker'

        if not self.format:
            self.format = 'docker' if self.backend == 'docker' else 'oci'

        # filter out tags which resolved to None
        self.tags = [t for t in self.tags if t]

        # default tag by default ...
        if not self.tags:
            self.tags = ['latest']

    def validate(self):
        if not self.repository or not self.REPOSITORY.match(self.repository):
            raise ParameterError(f'Invalid image reference: {self.arg!r}')
        for tag in self.tags:
            if not re.match(r'^[\w][\w.-]{0,127}$', tag):
                raise ParameterError(
                    f'Invalid tag {tag!r} in image reference {self.arg!r}')
        if self.digest and not self.DIGEST.match(self.digest):
            raise ParameterError(
                f'Invalid digest {self.digest!r} in image reference {self.arg!r}')
        return self

    def __str__(self):
        ref = f'{self.repository}:{self.tags[-1]}'
        if self.digest:
            ref += '@' + self.digest
        return ref

    async def push(self, target, name=None):
        user = os.getenv('IMAGES_USER', os.getenv('DOCKER_USER'))
        passwd = os.getenv('IMAGES_PASS', os.getenv('DOCKER_PASS'))
        registry = self.registry or 'docker.io'
        if user and passwd:
            target.output.cmd('buildah login -u ... -p ... ' + registry)
            await target.parent.exec(
                'buildah', 'login', '-u', user, '-p', passwd,
                registry, quiet=True)

        for tag in self.tags:
            await target.parent.exec(
                'buildah',
                'push',
                self.repository + ':final',
                name or f'docker://{registry}/{self.repository}:{tag}'
            )
