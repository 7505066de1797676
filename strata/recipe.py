"""
Minimal runtime image for a versioned python, on a dnf based distribution.

The versioned interpreter is installed next to the system python3, which
the distribution tooling relies on and which remains untouched. The init is
built from its pinned version with a compiler that doesn't make it to the
final image.
"""
import posixpath

from .actions.configure import Configure
from .actions.copy import Copy
from .actions.discard import Discard
from .actions.entrypoint import Entrypoint
from .actions.packages import Packages
from .actions.pip import Pip
from .actions.toolchain import Toolchain
from .config import PackageConfig
from .pipeline import Pipeline, Step
from .snapshot import Verify


def python(params, verify=True):
    config = PackageConfig('dnf')
    toolchain = ['gcc', f'{params.python}-devel']

    steps = [
        Step('copy-source', Copy(params.src, params.dst)),
        Step('configure', Configure(config)),
        Step('install-base', Packages(
            params.python,
            f'{params.python}-pip',
            'glibc-langpack-en',
            config=config,
        )),
        Step('upgrade-installer', Pip(
            'pip',
            python=params.python,
            upgrade=True,
        )),
        Step('toolchain', Toolchain(
            *toolchain,
            config=config,
            actions=[
                Pip(
                    params.init,
                    python=params.python,
                    constraints=posixpath.join(params.dst, params.constraints),
                ),
            ],
        )),
        Step('discard-source', Discard(params.dst)),
        Step('entrypoint', Entrypoint(
            params.init, '--',
            cmd=[params.python],
        )),
    ]

    if verify:
        steps.append(Step('verify', Verify(
            config,
            absent_packages=toolchain,
            absent_paths=[params.dst],
            interpreters={
                params.python: params.version,
                'python3': params.system_python,
            },
        )))

    return Pipeline(*steps)
