"""
Layered provisioning pipelines for container images.
"""
from .colors import colors
from .config import PackageConfig
from .constraints import Constraints
from .exceptions import (
    ParameterError,
    PipelineError,
    StrataException,
    ToolchainLeak,
    VerificationError,
    WrongResult,
)
from .image import Image
from .output import Output
from .params import Parameters
from .pipeline import Pipeline, Step
from .proc import Proc
from .snapshot import Snapshot, Verify

from .actions.configure import Configure
from .actions.copy import Copy
from .actions.discard import Discard
from .actions.entrypoint import Entrypoint
from .actions.packages import Packages, Remove
from .actions.pip import Pip
from .actions.run import Run
from .actions.toolchain import Toolchain

from .targets.base import Target
from .targets.buildah import Buildah
from .targets.stub import Stub

__version__ = '0.1.0'
