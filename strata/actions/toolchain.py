from ..exceptions import StrataException, ToolchainLeak
from ..snapshot import Snapshot
from .packages import Packages, Remove
from .run import instruction


class Toolchain:
    """
    Build-only packages, available to the given actions only.

    The packages are installed, the actions run, and the packages are removed
    whatever the outcome of the actions. Removal is then verified against the
    package database, a package still installed raises ToolchainLeak. When an
    action failed, its error is raised and a release error is only printed.

    Example::

        Toolchain(
            'gcc', 'python3.11-devel',
            config=config,
            actions=[Pip('dumb-init', python='python3.11')],
        )
    """

    def __init__(self, *packages, config, actions=None):
        self.packages = packages
        self.config = config
        self.actions = list(actions or [])

    @property
    def reads(self):
        return [
            path
            for action in self.actions
            for path in getattr(action, 'reads', [])
        ]

    async def __call__(self, target):
        await target(Packages(*self.packages, config=self.config))
        try:
            for action in self.actions:
                await target(action)
        except Exception:
            try:
                await self.release(target)
            except StrataException as e:
                # the build error is the one to raise
                target.output.error(e)
            raise
        await self.release(target)

    async def release(self, target):
        await target(Remove(*self.packages, config=self.config))
        await self.verify(target)

    async def verify(self, target):
        installed = await Snapshot(target, self.config).packages()
        leaked = [package for package in self.packages if package in installed]
        if leaked:
            raise ToolchainLeak(leaked)

    def commands(self):
        cmds = self.config.install(*self.packages)
        for action in self.actions:
            cmds += action.commands()
        return cmds + self.config.remove(*self.packages)

    def containerfile(self):
        return [instruction(*self.commands(), *self.config.clean())]

    async def cachekey(self):
        return ' '.join(
            [str(self), str(self.config)]
            + [str(action) for action in self.actions]
        )

    def __str__(self):
        return f'Toolchain({", ".join(self.packages)})'
