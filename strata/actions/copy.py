import asyncio
import binascii
import glob
import os

from ..exceptions import StrataException


class Copy:
    """
    Copy host files into the snapshot, last argument is the destination.

    Directories are copied with their content, which also makes up the cache
    key: changing a source file invalidates the layer.
    """

    def __init__(self, *args):
        self.dst = args[-1]
        self.src = []

        for src in args[:-1]:
            if '*' in src:
                self.src += sorted(glob.glob(src))
            else:
                self.src.append(src)

    def listfiles(self):
        if getattr(self, '_listfiles', None):
            return self._listfiles

        result = []
        for src in self.src:
            if not os.path.exists(src):
                raise StrataException(f'File not found {src}')

            if os.path.isfile(src):
                result.append(src)
                continue

            for root, dirs, files in os.walk(src):
                if '__pycache__' in root:
                    continue
                result += [
                    os.path.join(root, f)
                    for f in files
                    if not f.endswith('.pyc')
                ]
        self._listfiles = sorted(result)
        return self._listfiles

    async def __call__(self, target):
        self.listfiles()
        await target.mkdir(self.dst)

        for src in self.src:
            await target.copy(src, self.dst)

    def containerfile(self):
        # relative to the build context, which is the current directory
        src = [os.path.relpath(src) for src in self.src]
        return [f'COPY {" ".join(src)} {self.dst}']

    def __str__(self):
        return f'Copy({", ".join(self.src)}, {self.dst})'

    async def cachekey(self):
        async def chksum(path):
            with open(path, 'rb') as f:
                return (path, str(binascii.crc32(f.read())))
        results = await asyncio.gather(
            *[chksum(f) for f in self.listfiles()]
        )
        return str(self) + ' ' + str({path: chks for path, chks in results})
