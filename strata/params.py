"""
Build parameters.

Each parameter has a default, which the ``STRATA_<NAME>`` environment
variable overrides, which an explicit value overrides. Parameters are
resolved and validated once, before the pipeline starts, and can't change
afterwards.
"""
import os
import posixpath

from .constraints import Constraints
from .exceptions import ParameterError
from .image import Image


class Parameter:
    def __init__(self, name, default, doc=None):
        self.name = name
        self.default = default
        self.doc = doc

    @property
    def env(self):
        return 'STRATA_' + self.name.upper()

    def resolve(self, value=None):
        if value is not None:
            return value
        if os.getenv(self.env):
            return os.getenv(self.env)
        if callable(self.default):
            return self.default()
        return self.default


class Parameters:
    definitions = (
        Parameter(
            'base',
            'public.ecr.aws/amazonlinux/amazonlinux:2023',
            'Base image reference',
        ),
        Parameter('src', os.getcwd, 'Host directory copied into the image'),
        Parameter('dst', '/tmp/src', 'Where src is copied in the image'),
        Parameter('image', 'python311', 'Name of the image to commit'),
        Parameter('python', 'python3.11', 'Versioned interpreter to install'),
        Parameter(
            'system_python',
            '3.9',
            'Version of the system python3, which must remain untouched',
        ),
        Parameter(
            'constraints',
            'constraints.txt',
            'Constraints manifest file name in src',
        ),
        Parameter('init', 'dumb-init', 'Signal forwarding init to install'),
    )

    def __init__(self, **values):
        names = [p.name for p in self.definitions]
        unknown = [name for name in values if name not in names]
        if unknown:
            raise ParameterError('Unknown parameters: ' + ', '.join(unknown))

        object.__setattr__(self, '_values', {
            parameter.name: parameter.resolve(values.get(parameter.name))
            for parameter in self.definitions
        })
        self.validate()

    def validate(self):
        Image(self.base).validate()
        if Image(self.image).validate().digest:
            raise ParameterError(
                f'Image to commit cannot be pinned by digest: {self.image}')

        if not os.path.isdir(self.src):
            raise ParameterError(f'Source directory not found: {self.src}')

        if not posixpath.isabs(self.dst) or posixpath.normpath(self.dst) == '/':
            raise ParameterError(
                f'Destination must be an absolute path other than /: {self.dst}'
            )

        if not self.python.startswith('python3.'):
            raise ParameterError(
                f'Interpreter must be a versioned python3 name: {self.python}')

        if not self.manifest.pin(self.init):
            raise ParameterError(
                f'{self.init} is not pinned in {self.manifest.path}')

    @property
    def manifest(self):
        if '_manifest' not in self.__dict__:
            object.__setattr__(self, '_manifest', Constraints.load(
                os.path.join(self.src, self.constraints)
            ))
        return self._manifest

    @property
    def version(self):
        """Version of the versioned interpreter, ie. 3.11"""
        return self.python[len('python'):]

    def __getattr__(self, name):
        try:
            return self.__dict__['_values'][name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        raise ParameterError(f'Cannot set {name}, parameters are resolved')

    def items(self):
        return self._values.items()

    def __str__(self):
        return 'Parameters(' + ', '.join(
            f'{k}={v}' for k, v in self.items()
        ) + ')'
