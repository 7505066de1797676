class StrataException(Exception):
    pass


class ParameterError(StrataException):
    """A build parameter resolved to an invalid or unreachable value."""


class PipelineError(StrataException):
    """Steps are declared in an order that cannot produce the image."""


class WrongResult(StrataException):
    def __init__(self, proc):
        self.proc = proc

        msg = f'FAIL exit with {proc.rc} ' + str(proc.args[0])

        if proc.quiet:
            # nothing was echoed while running
            msg += '\n' + proc.cmd
            if proc.out:
                msg += '\n' + proc.out

        if proc.err:
            msg += '\n' + proc.err

        super().__init__(msg)


class ToolchainLeak(StrataException):
    def __init__(self, packages):
        self.packages = packages
        super().__init__(
            'Build toolchain still installed after removal: '
            + ', '.join(packages)
        )


class VerificationError(StrataException):
    def __init__(self, problems):
        self.problems = problems
        super().__init__('\n'.join(['Snapshot verification failed:'] + [
            f'- {problem}' for problem in problems
        ]))
