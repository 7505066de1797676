import sys

from .colors import colors


class Output:
    colors = colors

    def color(self, code=None):
        if not code:
            return '\u001b[0m'
        code = str(code)
        return u"\u001b[38;5;" + code + "m"

    def colorize(self, code, content):
        return self.color(code) + content + self.color()

    def colorized(self, action):
        if hasattr(action, 'colorized'):
            return action.colorized(self.colors)
        else:
            return str(action)

    def __init__(self, debug='cmd,visit,out', write=None, flush=None):
        self.debug = debug
        self.write = write or sys.stdout.buffer.write
        self.flush = flush or sys.stdout.flush

    def verbose(self, kind):
        """Return True if the debug setting includes kind: cmd, visit or out"""
        return self.debug is True or kind in str(self.debug)

    def __call__(self, line, flush=True):
        self.write(line.encode('utf8'))

        if flush:
            self.flush()

    def cmd(self, line):
        if not self.verbose('cmd'):
            return
        self(
            self.colorize(251, '+')
            + '\x1b[1;38;5;15m'
            + ' '
            + line
            + self.colors.reset
            + '\n',
        )

    def visit(self, color, label, action):
        if self.verbose('visit'):
            self(''.join([
                self.colors[color],
                label,
                self.colors.reset,
                self.colorized(action),
                '\n',
            ]))

    def clean(self, action):
        self.visit('bluebold', '+  CLEAN  ', action)

    def start(self, action):
        self.visit('orangebold', '⚠  START  ', action)

    def skip(self, action):
        self.visit('yellowbold', '↪️ SKIP    ', action)

    def success(self, action):
        self.visit('greenbold', '✔ SUCCESS ', action)

    def fail(self, action, exception=None):
        self.visit('redbold', '✘  FAIL   ', action)

    def info(self, message):
        self.visit('purplebold', 'ℹ  INFO   ', message)

    def error(self, message):
        """Print an error message, whatever the debug setting."""
        self(''.join([
            self.colors.red,
            str(message),
            self.colors.reset,
            '\n',
        ]))

    def results(self, target):
        counts = dict(success=0, cached=0, failure=0)
        for result in target.results:
            if result.status in counts:
                counts[result.status] += 1

        self(''.join([
            self.colors.greenbold,
            '✔ SUCCESS REPORT: ',
            self.colors.reset,
            str(counts['success']),
            '\n',
        ]))

        if counts['cached']:
            self(''.join([
                self.colors.yellowbold,
                '↪️ CACHED REPORT: ',
                self.colors.reset,
                str(counts['cached']),
                '\n',
            ]))

        if counts['failure']:
            self(''.join([
                self.colors.redbold,
                '✘  FAIL REPORT: ',
                self.colors.reset,
                str(counts['failure']),
                '\n',
            ]))
