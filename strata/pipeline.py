"""
Ordered provisioning steps.

A Pipeline is an ordered list of named Steps, each wrapping the actions it
runs. The target running the pipeline commits one snapshot per step, the
step names are the states the pipeline goes through.
"""
import asyncio

from .actions.configure import Configure
from .exceptions import PipelineError


class Step:
    def __init__(self, name, *actions):
        self.name = name
        self.actions = actions

    def walk(self):
        """Yield actions, with the actions they wrap."""
        for action in self.actions:
            yield action
            yield from getattr(action, 'actions', [])

    @property
    def reads(self):
        reads = []
        for action in self.walk():
            for path in getattr(action, 'reads', []):
                if path not in reads:
                    reads.append(path)
        return reads

    async def __call__(self, target):
        for action in self.actions:
            await target(action)

    async def cachekey(self):
        keys = [self.name]
        for action in self.actions:
            if hasattr(action, 'cachekey'):
                key = action.cachekey()
                if asyncio.iscoroutine(key):
                    key = await key
                keys.append(str(key))
            else:
                keys.append(str(action))
        return ' '.join(keys)

    def containerfile(self):
        lines = [f'# {self.name}']
        for action in self.actions:
            lines += action.containerfile()
        return lines

    def __str__(self):
        return f'{self.name}: ' + ', '.join(str(a) for a in self.actions)


class Pipeline:
    """
    Ordered steps, validated when declared.

    - step names are unique,
    - a step using a package configuration comes after the Configure step
      of that configuration,
    - no step reads from a path discarded by a previous step.
    """

    def __init__(self, *steps):
        self.steps = list(steps)
        self.validate()

    def __iter__(self):
        return iter(self.steps)

    def __len__(self):
        return len(self.steps)

    @property
    def names(self):
        return [step.name for step in self.steps]

    def validate(self):
        names = set()
        for name in self.names:
            if name in names:
                raise PipelineError(f'Step {name} declared twice')
            if name in ('start', 'done'):
                raise PipelineError(f'Step name {name} is reserved')
            names.add(name)

        configured = []
        discarded = []
        for step in self.steps:
            for action in step.walk():
                if isinstance(action, Configure):
                    configured.append(action.config)
                    continue

                config = getattr(action, 'config', None)
                if config is not None and not any(
                    config is c for c in configured
                ):
                    raise PipelineError(
                        f'{step.name}: {action} uses {config} before a'
                        ' Configure step'
                    )

                for path in getattr(action, 'reads', []):
                    for discard in discarded:
                        if path == discard or path.startswith(
                            discard.rstrip('/') + '/'
                        ):
                            raise PipelineError(
                                f'{step.name}: {action} reads {path} which'
                                f' was discarded before'
                            )

                discarded += getattr(action, 'discards', [])

    def state(self, results):
        """
        Return the name of the last step completed, in the order of the
        pipeline: ``start`` if none, ``done`` if all of them.
        """
        completed = [
            result.action
            for result in results
            if result.status in ('success', 'cached')
        ]
        state = 'start'
        for step in self.steps:
            if not any(step is action for action in completed):
                return state
            state = step.name
        return 'done'

    def containerfile(self, base):
        lines = [f'FROM {base}']
        for step in self.steps:
            lines += [''] + step.containerfile()
        return '\n'.join(lines) + '\n'
