"""
Post-hoc inspection of the filesystem a target runs on.
"""
import re

from .exceptions import VerificationError


def version_matches(version, expected):
    """Return True if version starts with the dotted parts of expected."""
    expected = str(expected).split('.')
    return version.split('.')[:len(expected)] == expected


class Snapshot:
    def __init__(self, target, config):
        self.target = target
        self.config = config

    async def packages(self):
        """Return the set of installed package names."""
        proc = await self.target.exec(self.config.query, quiet=True)
        return {line.strip() for line in proc.out.split('\n') if line.strip()}

    async def exists(self, path):
        return await self.target.exists(path)

    async def version(self, python):
        """Return the version of an interpreter, None if it won't run."""
        proc = await self.target.exec(
            f'{python} --version', raises=False, quiet=True)
        if proc.rc != 0:
            return None
        match = re.search(r'Python (\d+\.\d+\.\d+)', proc.out + proc.err)
        return match.group(1) if match else None


class Verify:
    """
    Fail the pipeline if the snapshot is not what it should be.

    :param absent_packages: packages which must not be installed
    :param absent_paths: paths which must not exist
    :param interpreters: dict of interpreter names to expected version prefix
    """

    def __init__(self, config, absent_packages=None, absent_paths=None,
                 interpreters=None):
        self.config = config
        self.absent_packages = list(absent_packages or [])
        self.absent_paths = list(absent_paths or [])
        self.interpreters = dict(interpreters or {})

    async def problems(self, target):
        snapshot = Snapshot(target, self.config)
        problems = []

        installed = await snapshot.packages()
        for package in self.absent_packages:
            if package in installed:
                problems.append(f'{package} is installed')

        for path in self.absent_paths:
            if await snapshot.exists(path):
                problems.append(f'{path} exists')

        for python, expected in self.interpreters.items():
            version = await snapshot.version(python)
            if not version:
                problems.append(f'{python} does not run')
            elif not version_matches(version, expected):
                problems.append(f'{python} is {version}, expected {expected}')

        return problems

    async def __call__(self, target):
        problems = await self.problems(target)
        if problems:
            raise VerificationError(problems)

    def containerfile(self):
        return []

    def __str__(self):
        return 'Verify(' + ', '.join(
            [f'-{package}' for package in self.absent_packages]
            + [f'-{path}' for path in self.absent_paths]
            + [f'{k}={v}' for k, v in self.interpreters.items()]
        ) + ')'
