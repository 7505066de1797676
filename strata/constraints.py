"""
Constraints manifest: a plain text file pinning one package version per
line, as consumed by ``pip install --constraint``.

Blank lines and ``#`` comments are ignored, environment markers after ``;``
are tolerated, anything else than a ``name==version`` pin is an error.
"""
import re

from .exceptions import ParameterError


class Constraints(dict):
    PATTERN = re.compile(
        r'^(?P<name>[A-Za-z0-9][A-Za-z0-9._-]*)\s*==\s*(?P<version>[^\s;]+)'
        r'\s*(;.*)?$'
    )

    def __init__(self, pins=None, path=None):
        super().__init__()
        self.path = path
        for name, version in (pins or {}).items():
            self[self.normalize(name)] = version

    @staticmethod
    def normalize(name):
        return re.sub(r'[-_.]+', '-', name).lower()

    @classmethod
    def parse(cls, content, path=None):
        constraints = cls(path=path)
        for number, line in enumerate(content.split('\n'), start=1):
            line = line.split('#')[0].strip()
            if not line:
                continue
            match = cls.PATTERN.match(line)
            if not match:
                raise ParameterError(
                    f'{path or "constraints"}:{number}: not a pin: {line}')
            name = cls.normalize(match.group('name'))
            if name in constraints:
                raise ParameterError(
                    f'{path or "constraints"}:{number}: {name} pinned twice')
            constraints[name] = match.group('version')
        return constraints

    @classmethod
    def load(cls, path):
        try:
            with open(path, 'r') as f:
                return cls.parse(f.read(), path=path)
        except FileNotFoundError:
            raise ParameterError(f'Constraints manifest not found: {path}')

    def pin(self, name):
        """Return the pinned version for name, or None."""
        return self.get(self.normalize(name))

    def __str__(self):
        return '\n'.join(f'{name}=={version}' for name, version in self.items())
