"""
Build a minimal python runtime container image with buildah.

Steps run in order in a working container, each of them committed as a
layer, the image is committed only if all of them succeed.

Parameters are keyword arguments, ie. dst=/tmp/src, which STRATA_<NAME>
environment variables otherwise provide.
"""
import cli2

from .exceptions import StrataException
from .output import Output
from .params import Parameters
from .recipe import python
from .targets.base import Target
from .targets.buildah import Buildah


class Group(cli2.Group):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cmdclass = Command


class Command(cli2.Command):
    def __call__(self, *argv):
        try:
            result = super().__call__(*argv)
        except StrataException as e:
            # configuration errors: no traceback, nothing ran yet
            Output().error(e)
            self.exit_code = 1
            return None

        if isinstance(result, Target):
            if result.failed:
                self.exit_code = 1
            result.output.results(result)
            return None
        return result


async def build(base=None, src=None, dst=None, image=None, push: bool=False,
                debug='cmd,visit,out'):
    """
    Build the image and commit it, then push it if push is set.

    :param base: Base image reference
    :param src: Host directory with constraints.txt, copied in the image
    :param dst: Path of the copy in the image, removed before commit
    :param image: Name of the image to commit
    :param debug: Output to display, combinable: cmd,visit,out
    """
    params = Parameters(base=base, src=src, dst=dst, image=image)
    output = Output(debug=debug)
    output.info(params)
    target = Buildah(
        *python(params),
        base=params.base,
        commit=params.image,
        push=push,
        output=output,
    )
    await target()
    return target


def containerfile(base=None, src=None, dst=None):
    """Print the Containerfile equivalent to the build steps."""
    params = Parameters(base=base, src=src, dst=dst)
    return python(params).containerfile(params.base).strip()


def steps(base=None, src=None, dst=None):
    """Print the build steps in order."""
    params = Parameters(base=base, src=src, dst=dst)
    return '\n'.join(str(step) for step in python(params))


def parameters(base=None, src=None, dst=None, image=None):
    """Print the resolved build parameters."""
    resolved = Parameters(base=base, src=src, dst=dst, image=image)
    return '\n'.join(
        f'{p.name}={getattr(resolved, p.name)}  # {p.env}: {p.doc}'
        for p in resolved.definitions
    )


cli = Group(doc=__doc__)
cli.add(build)
cli.add(containerfile)
cli.add(steps)
cli.add(parameters)
